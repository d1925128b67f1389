"""Catalog store persisted in a diskcache (SQLite) directory."""

from __future__ import annotations

import json
import sqlite3
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar

import structlog
from diskcache import Cache as DiskCache
from diskcache import Timeout as DiskCacheTimeout

from episodarr.domain.entities.catalog import (
    CascadePlan,
    CatalogEntity,
    CatalogExternalError,
    CatalogNotFoundError,
    CatalogSnapshot,
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
    ShowFields,
)
from episodarr.infrastructure.persistence.catalog_records import (
    episode_fields_to_record,
    episode_from_record,
    season_fields_to_record,
    season_from_record,
    show_fields_to_record,
    show_from_record,
)

log = structlog.get_logger(__name__)

T = TypeVar("T")


def _record_key(entity: CatalogEntity, entity_id: str) -> str:
    return f"catalog:{entity}:{entity_id}"


def _index_key(entity: CatalogEntity) -> str:
    return f"catalog:index:{entity}"


class DiskcacheCatalogRepository:
    """Stores Shows, Seasons and Episodes as JSON records in diskcache.

    - One key per record plus one id list per collection (insertion order).
    - Every mutation runs inside ``Cache.transact()``, so a cascade either
      commits as a whole or rolls back.
    - Implements context manager (``with``).

    Args:
        directory: diskcache directory (created by diskcache on open).
    """

    def __init__(self, directory: str | Path = "./data/catalog") -> None:
        self.directory = Path(directory)
        self._cache: DiskCache | None = None

    # --- Context Manager ---
    def __enter__(self) -> DiskcacheCatalogRepository:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def open(self) -> None:
        if self._cache is None:
            self._cache = DiskCache(str(self.directory))
            log.info("catalog_store_opened", path=str(self.directory))

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()
            self._cache = None
            log.info("catalog_store_closed", path=str(self.directory))

    @contextmanager
    def _transaction(self) -> Iterator[DiskCache]:
        if self._cache is None:
            raise RuntimeError(
                "Catalog store not opened. Use 'with repo:' or call repo.open()"
            )
        try:
            with self._cache.transact():
                yield self._cache
        except (DiskCacheTimeout, sqlite3.Error) as e:
            log.error("catalog_store_error", path=str(self.directory), error=str(e))
            raise CatalogExternalError(f"catalog store failure: {e}") from e

    # --- Record helpers (call inside a transaction) ---
    @staticmethod
    def _load(
        db: DiskCache,
        entity: CatalogEntity,
        entity_id: str,
        parse: Callable[[dict[str, Any]], T],
    ) -> T | None:
        data = db.get(_record_key(entity, entity_id))
        if data is None:
            return None
        try:
            return parse(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            log.error(
                "catalog_record_deserialize_error",
                entity=entity,
                entity_id=entity_id,
                error=str(e),
            )
            raise CatalogExternalError(
                f"corrupt {entity} record: {entity_id}"
            ) from e

    @staticmethod
    def _ids(db: DiskCache, entity: CatalogEntity) -> list[str]:
        return list(db.get(_index_key(entity), default=[]))

    def _load_all(
        self,
        db: DiskCache,
        entity: CatalogEntity,
        parse: Callable[[dict[str, Any]], T],
    ) -> tuple[T, ...]:
        out = []
        for entity_id in self._ids(db, entity):
            item = self._load(db, entity, entity_id, parse)
            if item is not None:
                out.append(item)
        return tuple(out)

    @staticmethod
    def _store(
        db: DiskCache,
        entity: CatalogEntity,
        entity_id: str,
        record: dict[str, Any],
    ) -> None:
        db.set(_record_key(entity, entity_id), json.dumps({"id": entity_id, **record}))

    def _insert(
        self, entity: CatalogEntity, record: dict[str, Any]
    ) -> str:
        entity_id = str(uuid.uuid4())
        with self._transaction() as db:
            self._store(db, entity, entity_id, record)
            db.set(_index_key(entity), [*self._ids(db, entity), entity_id])
        log.debug("catalog_record_saved", entity=entity, entity_id=entity_id)
        return entity_id

    def _update(
        self, entity: CatalogEntity, entity_id: str, record: dict[str, Any]
    ) -> None:
        with self._transaction() as db:
            if _record_key(entity, entity_id) not in db:
                raise CatalogNotFoundError(entity, entity_id)
            self._store(db, entity, entity_id, record)
        log.debug("catalog_record_saved", entity=entity, entity_id=entity_id)

    @staticmethod
    def _remove(db: DiskCache, entity: CatalogEntity, ids: tuple[str, ...]) -> None:
        if not ids:
            return
        doomed = set(ids)
        for entity_id in ids:
            db.delete(_record_key(entity, entity_id))
        remaining = [i for i in db.get(_index_key(entity), default=[]) if i not in doomed]
        db.set(_index_key(entity), remaining)

    def _snapshot(self, db: DiskCache) -> CatalogSnapshot:
        return CatalogSnapshot(
            shows=self._load_all(db, "show", show_from_record),
            seasons=self._load_all(db, "season", season_from_record),
            episodes=self._load_all(db, "episode", episode_from_record),
        )

    def _cascade(
        self,
        entity: CatalogEntity,
        entity_id: str,
        plan_for: Callable[[CatalogSnapshot], CascadePlan],
    ) -> CascadePlan:
        with self._transaction() as db:
            if _record_key(entity, entity_id) not in db:
                raise CatalogNotFoundError(entity, entity_id)
            plan = plan_for(self._snapshot(db))
            self._remove(db, "episode", plan.episode_ids)
            self._remove(db, "season", plan.season_ids)
            self._remove(db, "show", plan.show_ids)
        log.info(
            "catalog_cascade_deleted",
            entity=entity,
            entity_id=entity_id,
            removed=plan.total,
        )
        return plan

    # --- CatalogRepository implementation ---
    def snapshot(self) -> CatalogSnapshot:
        with self._transaction() as db:
            return self._snapshot(db)

    def get_show(self, show_id: str) -> Show | None:
        with self._transaction() as db:
            return self._load(db, "show", show_id, show_from_record)

    def get_season(self, season_id: str) -> Season | None:
        with self._transaction() as db:
            return self._load(db, "season", season_id, season_from_record)

    def get_episode(self, episode_id: str) -> Episode | None:
        with self._transaction() as db:
            return self._load(db, "episode", episode_id, episode_from_record)

    def add_show(self, fields: ShowFields) -> Show:
        record = show_fields_to_record(fields)
        return show_from_record({"id": self._insert("show", record), **record})

    def add_season(self, fields: SeasonFields) -> Season:
        record = season_fields_to_record(fields)
        return season_from_record({"id": self._insert("season", record), **record})

    def add_episode(self, fields: EpisodeFields) -> Episode:
        record = episode_fields_to_record(fields)
        return episode_from_record({"id": self._insert("episode", record), **record})

    def replace_show(self, show_id: str, fields: ShowFields) -> Show:
        record = show_fields_to_record(fields)
        self._update("show", show_id, record)
        return show_from_record({"id": show_id, **record})

    def replace_season(self, season_id: str, fields: SeasonFields) -> Season:
        record = season_fields_to_record(fields)
        self._update("season", season_id, record)
        return season_from_record({"id": season_id, **record})

    def replace_episode(self, episode_id: str, fields: EpisodeFields) -> Episode:
        record = episode_fields_to_record(fields)
        self._update("episode", episode_id, record)
        return episode_from_record({"id": episode_id, **record})

    def delete_show(self, show_id: str) -> CascadePlan:
        return self._cascade("show", show_id, lambda snap: snap.show_cascade(show_id))

    def delete_season(self, season_id: str) -> CascadePlan:
        return self._cascade(
            "season", season_id, lambda snap: snap.season_cascade(season_id)
        )

    def delete_episode(self, episode_id: str) -> CascadePlan:
        return self._cascade(
            "episode",
            episode_id,
            lambda _: CascadePlan(episode_ids=(episode_id,)),
        )
