import pytest

from pokecatch.core.rng import RNG
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.encounter import (
    Encounter,
    apply_damage,
    compute_damage,
    hp_band,
    hp_percent,
    place_bonus,
)
from pokecatch.domain.tuning import CaptureTuning


class _RecordingHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


@pytest.mark.parametrize("team_size", [0, 1, 6])
def test_damage_is_one_plus_team_size(team_size: int) -> None:
    assert compute_damage(1, team_size, critical=False, crit_multiplier=10) == 1 + team_size
    assert compute_damage(1, team_size, critical=True, crit_multiplier=10) == 10 * (1 + team_size)


def test_apply_damage_never_goes_below_zero() -> None:
    assert apply_damage(5, 3) == 2
    assert apply_damage(5, 50) == 0
    assert apply_damage(0, 1) == 0


def test_encounter_take_damage_clamps() -> None:
    encounter = Encounter.for_entry(CatalogueEntry(pokedex_id=1, name="a", hp=4))
    assert encounter.take_damage(3) == 3
    assert encounter.take_damage(3) == 1
    assert encounter.current_hp == 0
    assert encounter.is_depleted


def test_cancel_expiry_clears_handle() -> None:
    handle = _RecordingHandle()
    encounter = Encounter.for_entry(CatalogueEntry(pokedex_id=1, name="a"))
    encounter.expiry_handle = handle
    encounter.cancel_expiry()
    encounter.cancel_expiry()
    assert handle.cancelled
    assert encounter.expiry_handle is None


def test_hp_band_thresholds() -> None:
    assert hp_band(hp_percent(11, 20)) == "high"
    assert hp_band(hp_percent(10, 20)) == "medium"
    assert hp_band(hp_percent(6, 20)) == "medium"
    assert hp_band(hp_percent(5, 20)) == "low"
    assert hp_percent(0, 0) == 0.0


def test_place_bonus_stays_inside_arena() -> None:
    tuning = CaptureTuning()
    rng = RNG(3)
    for _ in range(200):
        position = place_bonus(rng, tuning)
        assert 0 <= position.x <= tuning.arena_width - tuning.bonus_width
        assert 0 <= position.y <= tuning.arena_height - tuning.bonus_height
