"""Real-time capture minigame: spawning, damage, bonus items and capture commits."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Protocol

from pokecatch.core.rng import RNG
from pokecatch.core.types import AnimationStage, CapturePhase, HitVisual
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.encounter import BonusSpawn, Encounter, Position, compute_damage, place_bonus
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.tuning import CaptureTuning
from pokecatch.services.pokedex_service import CommitResult

logger = logging.getLogger(__name__)


class CaptureGateway(Protocol):
    """Persists a capture; implemented by PokedexService."""

    def commit_capture(self, entry_id: int) -> CommitResult: ...


@dataclass(slots=True)
class CaptureEvent:
    """Base capture event."""


@dataclass(slots=True)
class EncounterSpawnedEvent(CaptureEvent):
    entry: CatalogueEntry
    max_hp: int


@dataclass(slots=True)
class HpChangedEvent(CaptureEvent):
    current_hp: int
    max_hp: int


@dataclass(slots=True)
class HitLandedEvent(CaptureEvent):
    damage: int
    critical: bool
    visual: HitVisual


@dataclass(slots=True)
class BonusSpawnedEvent(CaptureEvent):
    position: Position


@dataclass(slots=True)
class BonusRemovedEvent(CaptureEvent):
    pass


@dataclass(slots=True)
class EncounterExpiredEvent(CaptureEvent):
    entry: CatalogueEntry


@dataclass(slots=True)
class CaptureStartedEvent(CaptureEvent):
    entry: CatalogueEntry
    via_bonus: bool


@dataclass(slots=True)
class CaptureAnimationEvent(CaptureEvent):
    stage: AnimationStage
    seconds: float


@dataclass(slots=True)
class CaptureSucceededEvent(CaptureEvent):
    entry: CatalogueEntry


@dataclass(slots=True)
class CaptureFailedEvent(CaptureEvent):
    entry: CatalogueEntry
    reason: str


@dataclass(slots=True)
class AllCapturedEvent(CaptureEvent):
    pass


@dataclass(slots=True)
class EngineStoppedEvent(CaptureEvent):
    pass


EventListener = Callable[[CaptureEvent], None]


class CaptureEngine:
    """Owns the single active encounter and its timers.

    Runs on an asyncio event loop. The expiry timer is a loop.call_later
    handle kept on the encounter; the capture sequence is one task per
    encounter. Commands (start, stop, click_creature, click_bonus) are plain
    synchronous calls so that every fence is set before the loop can switch.
    """

    def __init__(
        self,
        roster: RosterState,
        gateway: CaptureGateway,
        *,
        tuning: CaptureTuning | None = None,
        rng: RNG | None = None,
    ) -> None:
        self._roster = roster
        self._gateway = gateway
        self._tuning = tuning or CaptureTuning()
        self._rng = rng or RNG()
        self._listeners: List[EventListener] = []
        self._loop: asyncio.AbstractEventLoop | None = None
        self._phase: CapturePhase = "idle"
        self._running = False
        self._session = 0
        self._encounter: Encounter | None = None
        self._resolution: asyncio.Task[None] | None = None
        self._pending_entry_ids: set[int] = set()

    # -----------------------
    # Observation
    # -----------------------
    @property
    def phase(self) -> CapturePhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def encounter(self) -> Encounter | None:
        return self._encounter

    @property
    def tuning(self) -> CaptureTuning:
        return self._tuning

    @property
    def resolution_task(self) -> asyncio.Task[None] | None:
        return self._resolution

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def time_remaining(self) -> float | None:
        """Seconds until the active encounter escapes, or None."""
        encounter = self._encounter
        if encounter is None or encounter.expires_at is None or self._loop is None:
            return None
        return max(0.0, encounter.expires_at - self._loop.time())

    # -----------------------
    # Commands
    # -----------------------
    def start(self) -> None:
        """Begin spawning. Must be called from inside a running event loop."""
        if self._running:
            logger.debug("start() ignored: engine already running")
            return
        self._loop = asyncio.get_running_loop()
        self._session += 1
        self._running = True
        logger.info("Capture session %d started", self._session)
        self._spawn_next()

    def stop(self) -> None:
        """Discard the encounter and go dormant until the next start().

        A capture already being resolved still reaches the store, but it
        will not spawn anything afterwards.
        """
        if self._phase == "stopped":
            return
        self._running = False
        encounter = self._encounter
        self._encounter = None
        if encounter is not None:
            encounter.cancel_expiry()
            self._remove_bonus(encounter)
        self._phase = "stopped"
        logger.info("Capture session %d stopped", self._session)
        self._emit(EngineStoppedEvent())

    def click_creature(self) -> HitLandedEvent | None:
        """Hit the active creature; returns the hit, or None when ignored."""
        encounter = self._encounter
        if encounter is None or self._phase != "active" or encounter.capture_in_progress:
            logger.debug("Creature click ignored in phase %s", self._phase)
            return None

        critical = self._rng.chance(self._tuning.crit_chance)
        damage = compute_damage(
            self._tuning.base_damage,
            self._roster.team_size(),
            critical=critical,
            crit_multiplier=self._tuning.crit_multiplier,
        )
        encounter.take_damage(damage)
        hit = HitLandedEvent(damage=damage, critical=critical, visual="critical" if critical else "slash")
        logger.debug("%s hit for %d (critical=%s), hp %d/%d", encounter.entry.name, damage, critical,
                     encounter.current_hp, encounter.max_hp)
        self._emit(hit)
        self._emit(HpChangedEvent(current_hp=encounter.current_hp, max_hp=encounter.max_hp))
        if encounter.is_depleted:
            self._begin_resolution(encounter, via_bonus=False)
        return hit

    def click_bonus(self) -> bool:
        """Use the bonus item: instant capture. Returns False when ignored."""
        encounter = self._encounter
        if encounter is None or self._phase != "active" or encounter.capture_in_progress:
            logger.debug("Bonus click ignored in phase %s", self._phase)
            return False
        bonus = encounter.bonus
        if bonus is None or bonus.consumed:
            return False
        bonus.consumed = True
        encounter.deplete()
        self._emit(HpChangedEvent(current_hp=encounter.current_hp, max_hp=encounter.max_hp))
        self._begin_resolution(encounter, via_bonus=True)
        return True

    # -----------------------
    # Spawning and expiry
    # -----------------------
    def _spawn_next(self) -> None:
        assert self._loop is not None
        previous = self._encounter
        if previous is not None:
            previous.cancel_expiry()
            self._remove_bonus(previous)
        self._encounter = None
        self._phase = "spawning"

        candidates = [
            entry for entry in self._roster.list_uncaptured() if entry.id not in self._pending_entry_ids
        ]
        if not candidates:
            self._running = False
            self._phase = "all_captured"
            logger.info("Nothing left to capture")
            self._emit(AllCapturedEvent())
            return

        entry = self._rng.choice(candidates)
        encounter = Encounter.for_entry(entry)
        self._encounter = encounter
        self._phase = "active"
        delay = self._tuning.expiry_seconds
        encounter.expires_at = self._loop.time() + delay
        encounter.expiry_handle = self._loop.call_later(delay, self._on_expiry, encounter)
        if self._rng.chance(self._tuning.bonus_chance):
            encounter.bonus = BonusSpawn(position=place_bonus(self._rng, self._tuning))

        # state is complete before listeners hear about it
        logger.info("A wild %s appeared (%d hp)", entry.name, encounter.max_hp)
        self._emit(EncounterSpawnedEvent(entry=entry, max_hp=encounter.max_hp))
        if encounter.bonus is not None:
            self._emit(BonusSpawnedEvent(position=encounter.bonus.position))

    def _on_expiry(self, encounter: Encounter) -> None:
        # the handle may already be queued when a capture starts; re-check
        if not self._running or encounter is not self._encounter or encounter.capture_in_progress:
            return
        encounter.expiry_handle = None
        self._phase = "expired"
        logger.info("%s got away", encounter.entry.name)
        self._emit(EncounterExpiredEvent(entry=encounter.entry))
        self._spawn_next()

    # -----------------------
    # Resolution
    # -----------------------
    def _begin_resolution(self, encounter: Encounter, *, via_bonus: bool) -> None:
        assert self._loop is not None
        encounter.capture_in_progress = True
        encounter.cancel_expiry()
        encounter.expires_at = None
        self._phase = "resolving"
        self._remove_bonus(encounter)
        if encounter.entry.id is not None:
            self._pending_entry_ids.add(encounter.entry.id)
        self._resolution = self._loop.create_task(self._resolve(encounter, self._session))
        self._emit(CaptureStartedEvent(entry=encounter.entry, via_bonus=via_bonus))

    async def _resolve(self, encounter: Encounter, session: int) -> None:
        entry = encounter.entry
        self._emit(CaptureAnimationEvent(stage="throw", seconds=self._tuning.throw_seconds))
        await asyncio.sleep(self._tuning.throw_seconds)
        self._emit(CaptureAnimationEvent(stage="flash", seconds=self._tuning.flash_seconds))
        await asyncio.sleep(self._tuning.flash_seconds)

        result = await self._commit(entry)
        if entry.id is not None:
            self._pending_entry_ids.discard(entry.id)
        if not result.success:
            # stays in "resolving" until someone restarts the engine
            logger.error("Capture of %s failed: %s", entry.name, result.reason)
            self._emit(CaptureFailedEvent(entry=entry, reason=result.reason or "unknown error"))
            return

        captured = self._roster.mark_captured(result.entry_id, result.capture_date) or entry
        logger.info("%s captured", captured.name)
        self._emit(CaptureSucceededEvent(entry=captured))

        await asyncio.sleep(self._tuning.cooldown_seconds)
        if self._running and self._session == session and self._encounter is encounter:
            self._spawn_next()

    async def _commit(self, entry: CatalogueEntry) -> CommitResult:
        if entry.id is None:
            return CommitResult.failed(-1, f"{entry.name} has no local id")
        loop = asyncio.get_running_loop()
        try:
            # store I/O runs off the loop so timers keep firing
            return await loop.run_in_executor(None, self._gateway.commit_capture, entry.id)
        except Exception as exc:
            logger.exception("Capture commit for %s raised", entry.name)
            return CommitResult.failed(entry.id, str(exc))

    # -----------------------
    # Helpers
    # -----------------------
    def _remove_bonus(self, encounter: Encounter) -> None:
        if encounter.bonus is None:
            return
        encounter.bonus = None
        self._emit(BonusRemovedEvent())

    def _emit(self, event: CaptureEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, type(event).__name__)
