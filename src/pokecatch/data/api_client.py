"""HTTP client that mirrors the public catalogue API."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Protocol

import requests

from pokecatch.core.types import SyncStatus
from pokecatch.data.errors import CatalogueFetchError, DataError
from pokecatch.data.transform import EntryStats, extract_stats, transform_entry
from pokecatch.domain.catalogue import CatalogueEntry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_TIMEOUT_SECONDS = 10
FIRST_GEN_COUNT = 151
FIRST_GEN_PAGE_SIZE = 50
FULL_LIST_PAGE_SIZE = 100
PROGRESS_EVERY = 10


class EntrySink(Protocol):
    """The part of the store that seeding writes into."""

    def count_all(self) -> int: ...

    def insert_entry(self, entry: CatalogueEntry) -> int: ...


@dataclass(slots=True)
class SyncFailure:
    name: str
    error: str


@dataclass(slots=True)
class SyncReport:
    """Outcome of a seeding run."""

    status: SyncStatus
    success_count: int = 0
    error_count: int = 0
    errors: List[SyncFailure] = field(default_factory=list)

    @property
    def total_processed(self) -> int:
        return self.success_count + self.error_count


@dataclass(slots=True)
class _CacheItem:
    data: Any
    stored_at: float


class CatalogueClient:
    """Fetches catalogue records with a short-lived in-memory cache."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: requests.Session | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache_ttl = cache_ttl
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._clock = clock
        self._cache: Dict[str, _CacheItem] = {}

    # -----------------------
    # Catalogue reads
    # -----------------------
    def get_entry(self, id_or_name: int | str) -> CatalogueEntry:
        """Return one transformed entry by catalogue id or name."""
        cache_key = f"pokemon_{id_or_name}"
        if self.is_cached(cache_key):
            logger.debug("Cache hit: %s", cache_key)
            return self._cache[cache_key].data
        raw = self._get_json(f"{self.base_url}/pokemon/{id_or_name}")
        entry = transform_entry(raw)
        self._store(cache_key, entry)
        return entry

    def get_entry_stats(self, id_or_name: int | str) -> EntryStats:
        """Return the raw base stats of one creature."""
        cache_key = f"pokemon_stats_{id_or_name}"
        if self.is_cached(cache_key):
            return self._cache[cache_key].data
        raw = self._get_json(f"{self.base_url}/pokemon/{id_or_name}")
        stats = extract_stats(raw)
        self._store(cache_key, stats)
        return stats

    def get_entry_list(self, offset: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
        """Return one page of `{name, url}` references."""
        cache_key = f"pokemon_list_{offset}_{limit}"
        if self.is_cached(cache_key):
            logger.debug("Cache hit: %s", cache_key)
            return self._cache[cache_key].data
        payload = self._get_json(f"{self.base_url}/pokemon", params={"offset": offset, "limit": limit})
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise CatalogueFetchError("Catalogue list response has no 'results' array.")
        self._store(cache_key, results)
        return results

    def get_all_first_gen(self) -> List[Dict[str, Any]]:
        """Return references for the first 151 creatures."""
        cache_key = "pokemon_list_all_first_gen"
        if self.is_cached(cache_key):
            return self._cache[cache_key].data
        collected: List[Dict[str, Any]] = []
        offset = 0
        has_more = True
        while has_more and len(collected) < FIRST_GEN_COUNT:
            page = self.get_entry_list(offset, FIRST_GEN_PAGE_SIZE)
            collected.extend(page)
            offset += FIRST_GEN_PAGE_SIZE
            has_more = len(page) == FIRST_GEN_PAGE_SIZE
        first_gen = collected[:FIRST_GEN_COUNT]
        self._store(cache_key, first_gen)
        return first_gen

    def get_all_entries(self) -> List[Dict[str, Any]]:
        """Walk every page until the catalogue returns an empty one."""
        cache_key = "pokemon_list_all"
        if self.is_cached(cache_key):
            return self._cache[cache_key].data
        collected: List[Dict[str, Any]] = []
        offset = 0
        while True:
            page = self.get_entry_list(offset, FULL_LIST_PAGE_SIZE)
            if not page:
                break
            collected.extend(page)
            offset += FULL_LIST_PAGE_SIZE
        self._store(cache_key, collected)
        logger.info("Catalogue lists %d entries", len(collected))
        return collected

    # -----------------------
    # Seeding
    # -----------------------
    def seed_database(self, store: EntrySink, limit: int = 0) -> SyncReport:
        """Fetch entries and insert them into the store.

        With limit 0 every entry is mirrored, unless the store already holds
        data. A failing entry is recorded and skipped; the run continues.
        """
        existing = store.count_all()
        if existing > 0 and limit == 0:
            logger.info("Store already holds %d entries; skipping sync", existing)
            return SyncReport(status="already_filled", success_count=existing)

        references = self.get_all_entries()
        if limit > 0:
            references = references[:limit]
        logger.info("Syncing %d catalogue entries", len(references))

        report = SyncReport(status="completed")
        for index, reference in enumerate(references, start=1):
            name = str(reference.get("name", ""))
            try:
                store.insert_entry(self.get_entry(name))
                report.success_count += 1
            except DataError as exc:
                report.error_count += 1
                report.errors.append(SyncFailure(name=name, error=str(exc)))
                logger.warning("Could not mirror %s: %s", name, exc)
            if index % PROGRESS_EVERY == 0:
                logger.info("Progress: %d/%d", index, len(references))
        logger.info("Sync finished: %d ok, %d failed", report.success_count, report.error_count)
        return report

    # -----------------------
    # Cache
    # -----------------------
    def is_cached(self, key: str) -> bool:
        """Return True when key is cached and not expired; drop it if expired."""
        item = self._cache.get(key)
        if item is None:
            return False
        if self._clock() - item.stored_at > self.cache_ttl:
            del self._cache[key]
            return False
        return True

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Catalogue cache cleared")

    def _store(self, key: str, data: Any) -> None:
        self._cache[key] = _CacheItem(data=data, stored_at=self._clock())

    def _get_json(self, url: str, params: Dict[str, Any] | None = None) -> Any:
        logger.debug("Fetching %s %s", url, params or "")
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise CatalogueFetchError(f"Request to {url} failed: {exc}") from exc
        if not response.ok:
            raise CatalogueFetchError(f"API error: {response.status_code} {response.reason}")
        try:
            return response.json()
        except ValueError as exc:
            raise CatalogueFetchError(f"Invalid JSON from {url}") from exc
