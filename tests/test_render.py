"""Tests for CLI rendering utilities."""
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.encounter import Position
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.team import TeamRoster
from pokecatch.presentation.cli.render import (
    debug_enabled,
    describe_event,
    format_entry_details,
    format_entry_line,
    format_hp_bar,
    format_team_lines,
)
from pokecatch.services.capture_engine import (
    AllCapturedEvent,
    BonusSpawnedEvent,
    CaptureEvent,
    HitLandedEvent,
    HpChangedEvent,
)


def _make_entry(entry_id: int = 1, *, captured: bool = False) -> CatalogueEntry:
    return CatalogueEntry(
        id=entry_id,
        pokedex_id=entry_id,
        name=f"mon{entry_id}",
        type_primary="grass",
        type_secondary="poison",
        height=0.7,
        weight=6.9,
        hp=10,
        is_captured=captured,
    )


def test_hp_bar_full_and_empty() -> None:
    assert format_hp_bar(20, 20, width=10) == "[##########] 20/20"
    assert format_hp_bar(0, 20, width=10) == "[          ] 0/20"


def test_hp_bar_fill_follows_band() -> None:
    assert format_hp_bar(8, 20, width=10) == "[====      ] 8/20"
    assert format_hp_bar(2, 20, width=10) == "[-         ] 2/20"


def test_entry_line_shows_types_and_status() -> None:
    line = format_entry_line(_make_entry(captured=True))
    assert "mon1" in line
    assert "grass/poison" in line
    assert "[Captured]" in line


def test_entry_details_for_uncaptured(monkeypatch) -> None:
    monkeypatch.delenv("POKECATCH_DEBUG", raising=False)
    lines = format_entry_details(_make_entry())
    assert "Height: 0.7 m" in lines
    assert "Weight: 6.9 kg" in lines
    assert lines[-1] == "Not captured yet"


def test_team_lines_list_every_slot() -> None:
    entry = _make_entry(3, captured=True)
    team = TeamRoster()
    team.assign(2, 3)
    lines = format_team_lines(RosterState.from_entries([entry], team))
    assert len(lines) == 6
    assert lines[0] == "Slot 1: (empty)"
    assert lines[1] == "Slot 2: mon3"


def test_describe_event_lines() -> None:
    assert describe_event(HitLandedEvent(damage=30, critical=True, visual="critical")) == "CRITICAL HIT! 30 damage"
    assert describe_event(HpChangedEvent(current_hp=10, max_hp=10)).endswith("10/10")
    assert "(12, 30)" in describe_event(BonusSpawnedEvent(position=Position(x=12.0, y=30.0)))
    assert "captured every creature" in describe_event(AllCapturedEvent())
    assert describe_event(CaptureEvent()) is None


def test_debug_enabled_requires_exact_flag(monkeypatch) -> None:
    monkeypatch.delenv("POKECATCH_DEBUG", raising=False)
    assert not debug_enabled()
    monkeypatch.setenv("POKECATCH_DEBUG", "true")
    assert not debug_enabled()
    monkeypatch.setenv("POKECATCH_DEBUG", "1")
    assert debug_enabled()
