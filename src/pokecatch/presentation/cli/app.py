"""Console-driven UI loops for PokeCatch."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal

from pokecatch.core.rng import RNG
from pokecatch.data.api_client import CatalogueClient, SyncReport
from pokecatch.data.database import CatalogueStore
from pokecatch.data.errors import DataError
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.team import TEAM_SIZE
from pokecatch.presentation.cli.config import build_tuning, load_config
from pokecatch.presentation.cli.render import (
    debug_enabled,
    describe_event,
    format_entry_details,
    format_entry_line,
    format_hp_bar,
    format_team_lines,
    render_bullet_lines,
    render_heading,
    render_menu,
)
from pokecatch.services import EntryNotFoundError, PokedexService, SyncError, TeamError, TeamService
from pokecatch.services.capture_engine import AllCapturedEvent, CaptureEngine, CaptureEvent
from pokecatch.services.controllers import CaptureController

MenuAction = Literal["capture", "pokedex", "team", "sync", "reset", "quit"]

_MAIN_MENU: List[tuple[MenuAction, str]] = [
    ("capture", "Capture"),
    ("pokedex", "Pokedex"),
    ("team", "Team"),
    ("sync", "Sync catalogue"),
    ("reset", "Reset and re-sync catalogue"),
    ("quit", "Quit"),
]

logger = logging.getLogger(__name__)


def main(config: Dict[str, Any] | None = None) -> None:
    """Start the interactive CLI session."""
    config = config or load_config()
    store = _build_store(config)
    try:
        pokedex_service = _build_pokedex_service(store, config)
        team_service = TeamService(store=store)
        print("=== PokeCatch ===")
        if store.count_all() == 0:
            print("The Pokedex is empty; downloading the catalogue (this can take a while)...")
            _run_sync(pokedex_service, reset=False)
        _main_menu_loop(pokedex_service, team_service, config)
    finally:
        store.close()
    print("Goodbye!")


def _build_store(config: Dict[str, Any]) -> CatalogueStore:
    store = CatalogueStore(Path(config["database_path"]))
    store.initialize()
    return store


def _build_pokedex_service(store: CatalogueStore, config: Dict[str, Any]) -> PokedexService:
    """Construct the PokedexService with the configured catalogue mirror."""
    client = CatalogueClient(config["api_base_url"])
    return PokedexService(store=store, client=client)


def _main_menu_loop(pokedex_service: PokedexService, team_service: TeamService, config: Dict[str, Any]) -> None:
    while True:
        roster = pokedex_service.load_roster()
        _render_home(roster)
        action = _prompt_main_menu()
        if action == "quit":
            return
        try:
            if action == "capture":
                _run_capture_view(pokedex_service, roster, config)
            elif action == "pokedex":
                _run_pokedex_view(pokedex_service, roster)
            elif action == "team":
                _run_team_editor(team_service, roster)
            elif action == "sync":
                _run_sync(pokedex_service, reset=False)
            else:
                _run_sync(pokedex_service, reset=True)
        except (TeamError, SyncError, DataError) as exc:
            logger.warning("Menu action %s failed: %s", action, exc)
            print(f"Error: {exc}")


def _render_home(roster: RosterState) -> None:
    render_heading("Home")
    print(f"Captured: {roster.captured_count}/{roster.total_count}")
    print("Team:")
    render_bullet_lines(format_team_lines(roster))


def _prompt_main_menu() -> MenuAction:
    render_menu("Main Menu", [label for _, label in _MAIN_MENU])
    while True:
        index = _prompt_index("Select an option: ", len(_MAIN_MENU))
        if index is not None:
            return _MAIN_MENU[index][0]


def _prompt_index(prompt: str, count: int) -> int | None:
    """Read a 1-based choice; returns a 0-based index, or None on bad input."""
    raw = input(prompt).strip()
    try:
        index = int(raw) - 1
    except ValueError:
        print("Please enter a number.")
        return None
    if 0 <= index < count:
        return index
    print(f"Please enter a value between 1 and {count}.")
    return None


# -----------------------
# Catalogue sync
# -----------------------
def _run_sync(pokedex_service: PokedexService, *, reset: bool) -> None:
    if reset:
        confirm = input("This deletes every capture and your team. Type 'yes' to continue: ").strip().lower()
        if confirm != "yes":
            print("Reset cancelled.")
            return
        report = pokedex_service.resync_catalogue()
    else:
        report = pokedex_service.sync_catalogue()
    _render_sync_report(report)


def _render_sync_report(report: SyncReport) -> None:
    if report.status == "already_filled":
        print(f"The Pokedex already holds {report.success_count} entries.")
        return
    print(f"Sync complete: {report.success_count} added, {report.error_count} failed.")
    if report.errors:
        render_bullet_lines(f"{failure.name}: {failure.error}" for failure in report.errors)


# -----------------------
# Pokedex
# -----------------------
def _run_pokedex_view(pokedex_service: PokedexService, roster: RosterState) -> None:
    render_heading("Pokedex")
    if not roster.entries:
        print("No entries yet. Sync the catalogue first.")
        return
    for entry in roster.entries:
        print(format_entry_line(entry))
    while True:
        raw = input("Enter a number for details (blank to go back): ").strip()
        if not raw:
            return
        entry = _find_by_pokedex_id(roster.entries, raw)
        if entry is None or entry.id is None:
            print("No entry with that number.")
            continue
        try:
            details = pokedex_service.get_entry_details(entry.id)
        except EntryNotFoundError:
            print("That entry no longer exists.")
            continue
        render_heading(details.name)
        for line in format_entry_details(details):
            print(line)


def _find_by_pokedex_id(entries: List[CatalogueEntry], raw: str) -> CatalogueEntry | None:
    try:
        wanted = int(raw.lstrip("#"))
    except ValueError:
        return None
    for entry in entries:
        if entry.pokedex_id == wanted:
            return entry
    return None


# -----------------------
# Team editor
# -----------------------
def _run_team_editor(team_service: TeamService, roster: RosterState) -> None:
    captured = sorted(roster.captured, key=lambda entry: entry.name)
    if not captured:
        print("Capture something first to build a team.")
        return
    while True:
        render_heading("Team")
        render_bullet_lines(format_team_lines(roster))
        print("Commands: add <slot> <number>, remove <slot>, move <from> <to>, save, back")
        parts = input("> ").strip().lower().split()
        if not parts:
            continue
        command, args = parts[0], parts[1:]
        if command == "back":
            return
        try:
            if command == "save":
                team_service.save_team(roster)
                print("Team saved.")
            elif command == "add" and len(args) == 2:
                entry = _find_by_pokedex_id(captured, args[1])
                if entry is None or entry.id is None:
                    print("You have not captured that one.")
                    continue
                team_service.assign(roster, _parse_slot(args[0]), entry.id)
            elif command == "remove" and len(args) == 1:
                team_service.remove(roster, _parse_slot(args[0]))
            elif command == "move" and len(args) == 2:
                team_service.move(roster, _parse_slot(args[0]), _parse_slot(args[1]))
            else:
                print("Unknown command.")
        except TeamError as exc:
            print(f"Error: {exc}")


def _parse_slot(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise TeamError(f"Slot must be a number from 1 to {TEAM_SIZE}.") from exc


# -----------------------
# Capture minigame
# -----------------------
def _run_capture_view(pokedex_service: PokedexService, roster: RosterState, config: Dict[str, Any]) -> None:
    if not roster.entries:
        print("No entries yet. Sync the catalogue first.")
        return
    render_heading("Capture")
    print("Press Enter to attack, 'b' + Enter to throw the bonus ball, 's' for status, 'q' to leave.")
    rng = RNG()
    engine = CaptureEngine(roster, pokedex_service, tuning=build_tuning(config), rng=rng)
    asyncio.run(_capture_session(engine, CaptureController(engine)))


def _print_event(event: CaptureEvent) -> None:
    line = describe_event(event)
    if line is not None:
        print(line)
    if debug_enabled():
        print(f"[debug] {event}")
    if isinstance(event, AllCapturedEvent):
        # the input read already in flight must finish before the view closes
        print("Press Enter to return to the menu.")


async def _capture_session(engine: CaptureEngine, controller: CaptureController) -> None:
    loop = asyncio.get_running_loop()
    engine.subscribe(_print_event)
    try:
        engine.start()
        while True:
            raw = (await loop.run_in_executor(None, input, "")).strip().lower()
            if raw == "q" or engine.phase == "all_captured":
                break
            if raw == "b":
                if not controller.click_bonus():
                    print("No bonus ball right now.")
            elif raw == "s":
                _render_status(controller)
            else:
                controller.click_creature()
        engine.stop()
        task = engine.resolution_task
        if task is not None and not task.done():
            print("Waiting for the last capture to finish...")
            await task
    finally:
        engine.unsubscribe(_print_event)


def _render_status(controller: CaptureController) -> None:
    view = controller.get_encounter_view()
    if view is None:
        print(f"Nothing on screen ({controller.phase}).")
        return
    remaining = f"{view.time_remaining:.1f}s left" if view.time_remaining is not None else "capturing"
    print(f"#{view.pokedex_id} {view.name} {format_hp_bar(view.current_hp, view.max_hp)} ({remaining})")
    if view.bonus_position is not None:
        print("A bonus ball is available.")
