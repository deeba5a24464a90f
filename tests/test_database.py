from pathlib import Path

import pytest

from pokecatch.data.database import CatalogueStore
from pokecatch.data.errors import StoreError
from pokecatch.domain.catalogue import CatalogueEntry


def _make_entry(pokedex_id: int, name: str, hp: int = 10) -> CatalogueEntry:
    return CatalogueEntry(pokedex_id=pokedex_id, name=name, type_primary="normal", hp=hp)


def _make_store(tmp_path: Path) -> CatalogueStore:
    store = CatalogueStore(tmp_path / "nested" / "pokedex.db")
    store.initialize()
    return store


def test_initialize_creates_parent_directory(tmp_path: Path) -> None:
    store = _make_store(tmp_path)
    assert (tmp_path / "nested" / "pokedex.db").exists()
    assert store.count_all() == 0
    store.close()


def test_insert_and_read_entries(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        second = store.insert_entry(_make_entry(2, "Ivysaur"))
        first = store.insert_entry(_make_entry(1, "Bulbasaur", hp=9))

        entries = store.get_all_entries()
        assert [entry.pokedex_id for entry in entries] == [1, 2]
        assert entries[0].id == first
        assert entries[0].hp == 9
        assert entries[0].is_captured is False
        assert store.get_entry_by_id(second).name == "Ivysaur"
        assert store.get_entry_by_pokedex_id(1).name == "Bulbasaur"
        assert store.get_entry_by_name("bulbasaur").pokedex_id == 1
        assert store.get_entry_by_id(999) is None


def test_duplicate_pokedex_id_is_rejected(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        store.insert_entry(_make_entry(1, "Bulbasaur"))
        with pytest.raises(StoreError):
            store.insert_entry(_make_entry(1, "Bulbasaur"))
        assert store.count_all() == 1


def test_update_captured_sets_flag_and_date(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        entry_id = store.insert_entry(_make_entry(4, "Charmander"))
        capture_date = store.update_captured(entry_id, True)

        stored = store.get_entry_by_id(entry_id)
        assert capture_date is not None
        assert stored.is_captured is True
        assert stored.capture_date == capture_date
        assert store.count_captured() == 1
        assert [entry.name for entry in store.get_captured_entries()] == ["Charmander"]

        assert store.update_captured(entry_id, False) is None
        assert store.count_captured() == 0


def test_update_captured_unknown_id_raises(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        with pytest.raises(StoreError):
            store.update_captured(42, True)


def test_team_slots_and_details(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        a = store.insert_entry(_make_entry(1, "Bulbasaur"))
        b = store.insert_entry(_make_entry(4, "Charmander"))

        store.add_to_team(1, a)
        store.add_to_team(3, b)
        assert store.get_team() == [(1, a), (3, b)]

        store.add_to_team(2, a)
        assert store.get_team() == [(2, a), (3, b)]

        store.remove_from_team(3)
        details = store.get_team_with_details()
        assert details[0][1].name == "Bulbasaur"
        assert details[1] == (3, None)


def test_update_team_replaces_all_slots(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        a = store.insert_entry(_make_entry(1, "Bulbasaur"))
        b = store.insert_entry(_make_entry(4, "Charmander"))
        store.add_to_team(6, a)

        store.update_team([(1, b), (2, None), (5, a)])

        assert store.get_team() == [(1, b), (5, a)]


def test_invalid_team_position_raises(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        entry_id = store.insert_entry(_make_entry(1, "Bulbasaur"))
        with pytest.raises(ValueError):
            store.add_to_team(7, entry_id)
        with pytest.raises(ValueError):
            store.update_team([(0, entry_id)])


def test_delete_entry_empties_its_team_slot(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        entry_id = store.insert_entry(_make_entry(1, "Bulbasaur"))
        store.add_to_team(1, entry_id)
        store.delete_entry(entry_id)
        assert store.get_team() == [(1, None)]


def test_clear_entries_drops_team_too(tmp_path: Path) -> None:
    with CatalogueStore(tmp_path / "pokedex.db") as store:
        entry_id = store.insert_entry(_make_entry(1, "Bulbasaur"))
        store.add_to_team(1, entry_id)
        store.clear_entries()
        assert store.count_all() == 0
        assert store.get_team() == []


def test_uninitialized_store_raises() -> None:
    with pytest.raises(StoreError):
        CatalogueStore(":memory:").count_all()
