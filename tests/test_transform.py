from typing import Any, Dict

import pytest

from pokecatch.data.errors import DataValidationError
from pokecatch.data.transform import derive_hp, extract_stats, transform_entry


def _make_raw(**overrides: Any) -> Dict[str, Any]:
    raw: Dict[str, Any] = {
        "id": 1,
        "name": "bulbasaur",
        "height": 7,
        "weight": 69,
        "types": [
            {"slot": 1, "type": {"name": "grass"}},
            {"slot": 2, "type": {"name": "poison"}},
        ],
        "sprites": {
            "front_default": "https://img/front/1.png",
            "other": {"official-artwork": {"front_default": "https://img/art/1.png"}},
        },
        "stats": [
            {"base_stat": 45, "stat": {"name": "hp"}},
            {"base_stat": 49, "stat": {"name": "attack"}},
            {"base_stat": 49, "stat": {"name": "defense"}},
            {"base_stat": 65, "stat": {"name": "special-attack"}},
            {"base_stat": 65, "stat": {"name": "special-defense"}},
            {"base_stat": 45, "stat": {"name": "speed"}},
        ],
    }
    raw.update(overrides)
    return raw


def test_transform_maps_fields() -> None:
    entry = transform_entry(_make_raw())
    assert entry.pokedex_id == 1
    assert entry.name == "bulbasaur"
    assert entry.type_primary == "grass"
    assert entry.type_secondary == "poison"
    assert entry.height == pytest.approx(0.7)
    assert entry.weight == pytest.approx(6.9)
    assert entry.hp == 9
    assert entry.is_captured is False
    assert entry.id is None


def test_hp_is_base_stat_divided_by_five_rounded_up() -> None:
    entry = transform_entry(_make_raw(stats=[{"base_stat": 48, "stat": {"name": "hp"}}]))
    assert entry.hp == 10
    assert derive_hp([{"base_stat": 50, "stat": {"name": "hp"}}]) == 10
    assert derive_hp([{"base_stat": 1, "stat": {"name": "hp"}}]) == 1


def test_missing_hp_stat_falls_back_to_default() -> None:
    entry = transform_entry(_make_raw(stats=[{"base_stat": 49, "stat": {"name": "attack"}}]))
    assert entry.hp == 20
    assert derive_hp(None) == 20


def test_image_prefers_official_artwork() -> None:
    assert transform_entry(_make_raw()).image_url == "https://img/art/1.png"
    no_art = transform_entry(_make_raw(sprites={"front_default": "https://img/front/1.png", "other": {}}))
    assert no_art.image_url == "https://img/front/1.png"
    assert transform_entry(_make_raw(sprites=None)).image_url == ""


def test_single_type_leaves_secondary_empty() -> None:
    entry = transform_entry(_make_raw(types=[{"slot": 1, "type": {"name": "fire"}}]))
    assert entry.types == ("fire",)
    assert entry.type_secondary is None


def test_missing_measurements_are_none() -> None:
    raw = _make_raw()
    del raw["height"]
    del raw["weight"]
    entry = transform_entry(raw)
    assert entry.height is None
    assert entry.weight is None


@pytest.mark.parametrize("overrides", [{"id": None}, {"id": "1"}, {"name": ""}])
def test_invalid_records_are_rejected(overrides: Dict[str, Any]) -> None:
    with pytest.raises(DataValidationError):
        transform_entry(_make_raw(**overrides))


def test_extract_stats_reads_all_six() -> None:
    stats = extract_stats(_make_raw())
    assert stats.name == "bulbasaur"
    assert (stats.hp, stats.attack, stats.special_attack, stats.speed) == (45, 49, 65, 45)
