"""Catalog store backed by the remote catalog REST API (sync httpx client).

Endpoints (relative to ``base_url``)::

    GET    /shows            list (store order)
    POST   /shows            create, server assigns ``id``
    GET    /shows/{id}       fetch one
    PUT    /shows/{id}       replace
    DELETE /shows/{id}       delete with server-side cascade

and the same for ``/seasons`` and ``/episodes``. Mutating calls carry the
operator's bearer token when one is configured; the token is passed through
untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import structlog

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

_COLLECTIONS: dict[CatalogEntity, str] = {
    "show": "shows",
    "season": "seasons",
    "episode": "episodes",
}

_MUTATING_METHODS = frozenset({"POST", "PUT", "DELETE"})


class HttpCatalogRepository:
    """Implements ``CatalogRepository`` against the remote catalog API.

    Failures are never retried: transport errors and non-2xx answers become
    ``CatalogExternalError`` (cause chained), 404 on an
    addressed record becomes ``CatalogNotFoundError`` or ``None``.
    """

    def __init__(
        self,
        *,
        http_client: httpx.Client,
        base_url: str,
        api_token: str | None = None,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self, method: str) -> dict[str, str]:
        if not self._api_token or method not in _MUTATING_METHODS:
            return {}
        return {"Authorization": f"Bearer {self._api_token}"}

    def _url(self, entity: CatalogEntity, entity_id: str | None = None) -> str:
        url = f"{self._base_url}/{_COLLECTIONS[entity]}"
        return f"{url}/{entity_id}" if entity_id is not None else url

    def _request(
        self,
        method: str,
        entity: CatalogEntity,
        entity_id: str | None = None,
        *,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response | None:
        """Send one request. Returns None on 404 for addressed records."""
        url = self._url(entity, entity_id)
        try:
            resp = self._http.request(
                method, url, json=json, headers=self._headers(method)
            )
        except httpx.HTTPError as e:
            log.warning(
                "catalog_api_network_error",
                method=method,
                url=url,
                error=str(e),
            )
            raise CatalogExternalError(
                f"catalog API unreachable: {method} {url}"
            ) from e

        if resp.status_code == 404 and entity_id is not None:
            log.debug("catalog_api_not_found", entity=entity, entity_id=entity_id)
            return None
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            if resp.status_code in (401, 403):
                log.error("catalog_api_unauthorized", status=resp.status_code, url=url)
            else:
                log.warning(
                    "catalog_api_http_error",
                    method=method,
                    url=url,
                    status=resp.status_code,
                )
            raise CatalogExternalError(
                f"catalog API rejected {method} {url}: {resp.status_code} "
                f"{_detail(resp)}"
            ) from e
        return resp

    def _parse(
        self,
        resp: httpx.Response,
        entity: CatalogEntity,
        parse: Callable[[dict[str, Any]], T],
    ) -> T:
        try:
            return parse(resp.json())
        except (ValueError, KeyError, TypeError) as e:
            log.warning("catalog_api_bad_payload", entity=entity, error=str(e))
            raise CatalogExternalError(f"malformed {entity} payload") from e

    def _list(
        self, entity: CatalogEntity, parse: Callable[[dict[str, Any]], T]
    ) -> tuple[T, ...]:
        resp = self._request("GET", entity)
        assert resp is not None
        try:
            return tuple(parse(item) for item in resp.json())
        except (ValueError, KeyError, TypeError) as e:
            log.warning("catalog_api_bad_payload", entity=entity, error=str(e))
            raise CatalogExternalError(f"malformed {entity} list payload") from e

    def _get(
        self,
        entity: CatalogEntity,
        entity_id: str,
        parse: Callable[[dict[str, Any]], T],
    ) -> T | None:
        resp = self._request("GET", entity, entity_id)
        return self._parse(resp, entity, parse) if resp is not None else None

    def _create(
        self,
        entity: CatalogEntity,
        record: dict[str, Any],
        parse: Callable[[dict[str, Any]], T],
    ) -> T:
        resp = self._request("POST", entity, json=record)
        assert resp is not None
        return self._parse(resp, entity, parse)

    def _replace(
        self,
        entity: CatalogEntity,
        entity_id: str,
        record: dict[str, Any],
        parse: Callable[[dict[str, Any]], T],
    ) -> T:
        resp = self._request("PUT", entity, entity_id, json=record)
        if resp is None:
            raise CatalogNotFoundError(entity, entity_id)
        return self._parse(resp, entity, parse)

    def _delete(self, entity: CatalogEntity, entity_id: str, plan: CascadePlan) -> CascadePlan:
        if self._request("DELETE", entity, entity_id) is None:
            raise CatalogNotFoundError(entity, entity_id)
        log.info(
            "catalog_cascade_deleted",
            entity=entity,
            entity_id=entity_id,
            removed=plan.total,
        )
        return plan

    # ------------------------------------------------------------------
    # Public API (CatalogRepository)
    # ------------------------------------------------------------------

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            shows=self._list("show", show_from_record),
            seasons=self._list("season", season_from_record),
            episodes=self._list("episode", episode_from_record),
        )

    def get_show(self, show_id: str) -> Show | None:
        return self._get("show", show_id, show_from_record)

    def get_season(self, season_id: str) -> Season | None:
        return self._get("season", season_id, season_from_record)

    def get_episode(self, episode_id: str) -> Episode | None:
        return self._get("episode", episode_id, episode_from_record)

    def add_show(self, fields: ShowFields) -> Show:
        return self._create("show", show_fields_to_record(fields), show_from_record)

    def add_season(self, fields: SeasonFields) -> Season:
        return self._create("season", season_fields_to_record(fields), season_from_record)

    def add_episode(self, fields: EpisodeFields) -> Episode:
        return self._create(
            "episode", episode_fields_to_record(fields), episode_from_record
        )

    def replace_show(self, show_id: str, fields: ShowFields) -> Show:
        return self._replace(
            "show", show_id, show_fields_to_record(fields), show_from_record
        )

    def replace_season(self, season_id: str, fields: SeasonFields) -> Season:
        return self._replace(
            "season", season_id, season_fields_to_record(fields), season_from_record
        )

    def replace_episode(self, episode_id: str, fields: EpisodeFields) -> Episode:
        return self._replace(
            "episode", episode_id, episode_fields_to_record(fields), episode_from_record
        )

    # The server owns the cascade; the plan reported back is computed from
    # the collections as listed right before the DELETE.
    def delete_show(self, show_id: str) -> CascadePlan:
        return self._delete("show", show_id, self.snapshot().show_cascade(show_id))

    def delete_season(self, season_id: str) -> CascadePlan:
        return self._delete(
            "season", season_id, self.snapshot().season_cascade(season_id)
        )

    def delete_episode(self, episode_id: str) -> CascadePlan:
        return self._delete(
            "episode", episode_id, CascadePlan(episode_ids=(episode_id,))
        )


def _detail(resp: httpx.Response) -> str:
    """Best-effort ``detail`` message from a FastAPI-style error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return ""
