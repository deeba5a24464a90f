from pathlib import Path
from typing import Iterator

import pytest

from pokecatch.data.api_client import SyncFailure, SyncReport
from pokecatch.data.database import CatalogueStore
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.roster_state import RosterState
from pokecatch.presentation.cli import app
from pokecatch.services import TeamError, TeamService
from pokecatch.services.capture_engine import AllCapturedEvent


def _feed_input(monkeypatch, answers: list[str]) -> None:
    replies: Iterator[str] = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_main_menu_returns_selected_action(monkeypatch) -> None:
    _feed_input(monkeypatch, ["x", "9", "3"])
    assert app._prompt_main_menu() == "team"


def test_find_by_pokedex_id_accepts_hash_prefix() -> None:
    entries = [CatalogueEntry(id=1, pokedex_id=25, name="pikachu")]
    assert app._find_by_pokedex_id(entries, "#25").name == "pikachu"
    assert app._find_by_pokedex_id(entries, "26") is None
    assert app._find_by_pokedex_id(entries, "pika") is None


def test_parse_slot_rejects_words() -> None:
    with pytest.raises(TeamError):
        app._parse_slot("first")


def test_sync_report_lists_failures(capsys) -> None:
    report = SyncReport(status="completed", success_count=2, error_count=1, errors=[SyncFailure("mew", "404")])
    app._render_sync_report(report)
    out = capsys.readouterr().out
    assert "2 added, 1 failed" in out
    assert "- mew: 404" in out


def test_team_editor_saves_assignments(monkeypatch, tmp_path: Path) -> None:
    store = CatalogueStore(tmp_path / "pokedex.db")
    store.initialize()
    entry_id = store.insert_entry(CatalogueEntry(pokedex_id=25, name="pikachu"))
    store.update_captured(entry_id, True)
    roster = RosterState.from_entries(store.get_all_entries())
    _feed_input(monkeypatch, ["add 2 25", "save", "back"])

    app._run_team_editor(TeamService(store=store), roster)

    assert store.get_team() == [(2, entry_id)]
    store.close()


def test_team_editor_reports_empty_save(monkeypatch, tmp_path: Path, capsys) -> None:
    store = CatalogueStore(tmp_path / "pokedex.db")
    store.initialize()
    entry_id = store.insert_entry(CatalogueEntry(pokedex_id=25, name="pikachu"))
    store.update_captured(entry_id, True)
    roster = RosterState.from_entries(store.get_all_entries())
    _feed_input(monkeypatch, ["save", "back"])

    app._run_team_editor(TeamService(store=store), roster)

    assert "Add at least one creature" in capsys.readouterr().out
    store.close()


def test_all_captured_event_tells_player_how_to_leave(monkeypatch, capsys) -> None:
    monkeypatch.delenv("POKECATCH_DEBUG", raising=False)
    app._print_event(AllCapturedEvent())
    out = capsys.readouterr().out
    assert "captured every creature" in out
    assert "Press Enter to return to the menu." in out
