import asyncio

from pokecatch.core.rng import RNG
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.tuning import CaptureTuning
from pokecatch.services.capture_engine import CaptureEngine
from pokecatch.services.controllers import CaptureController
from pokecatch.services.pokedex_service import CommitResult


class _AcceptAllGateway:
    def commit_capture(self, entry_id: int) -> CommitResult:
        return CommitResult.ok(entry_id, None)


def _make_controller(*, bonus_chance: float = 0.0) -> tuple[CaptureController, CaptureEngine]:
    roster = RosterState.from_entries([CatalogueEntry(id=1, pokedex_id=25, name="pikachu", hp=8)])
    tuning = CaptureTuning(
        expiry_seconds=30.0,
        throw_seconds=0.0,
        flash_seconds=0.0,
        cooldown_seconds=0.0,
        crit_chance=0.0,
        bonus_chance=bonus_chance,
    )
    engine = CaptureEngine(roster, _AcceptAllGateway(), tuning=tuning, rng=RNG(2))
    return CaptureController(engine), engine


def test_no_view_before_start() -> None:
    controller, _ = _make_controller()
    assert controller.get_encounter_view() is None
    assert controller.target_at(300, 200) == "none"
    assert controller.phase == "idle"


def test_click_at_centre_hits_creature() -> None:
    controller, engine = _make_controller()

    async def scenario() -> None:
        engine.start()
        assert controller.target_at(10, 10) == "none"
        assert controller.click_at(300, 200) == "creature"
        view = controller.get_encounter_view()
        assert view.name == "pikachu"
        assert view.current_hp == 7
        assert view.hp_band == "high"
        assert view.bonus_position is None
        assert view.time_remaining is not None
        engine.stop()

    asyncio.run(scenario())


def test_bonus_takes_priority_over_creature() -> None:
    controller, engine = _make_controller(bonus_chance=1.0)

    async def scenario() -> None:
        engine.start()
        position = controller.get_encounter_view().bonus_position
        assert position is not None
        assert controller.target_at(position.x + 1, position.y + 1) == "bonus"
        assert controller.click_at(position.x + 1, position.y + 1) == "bonus"
        view = controller.get_encounter_view()
        assert view.current_hp == 0
        assert view.capturing
        await engine.resolution_task

    asyncio.run(scenario())

    assert controller.phase == "all_captured"
