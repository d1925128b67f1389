"""Tests for catalog entities, snapshot queries and cascade planning."""

from __future__ import annotations

import dataclasses

import pytest

from episodarr.domain.entities import (
    CascadePlan,
    CatalogError,
    CatalogExternalError,
    CatalogIntegrityError,
    CatalogNotFoundError,
    CatalogSnapshot,
    CatalogValidationError,
    Episode,
    ResolvedVideoSource,
    Season,
    Show,
    VideoProvider,
)


def _episode(episode_id: str, show_id: str, season_id: str, number: int) -> Episode:
    return Episode(
        id=episode_id,
        show_id=show_id,
        season_id=season_id,
        episode_number=number,
        video_url=f"https://cdn.example.com/{episode_id}.mp4",
    )


@pytest.fixture()
def snap() -> CatalogSnapshot:
    """Two shows; show s1 has two seasons, show s2 one."""
    return CatalogSnapshot(
        shows=(Show(id="s1", name="Alpha"), Show(id="s2", name="Beta")),
        seasons=(
            Season(id="se1", show_id="s1", season_number=1),
            Season(id="se2", show_id="s2", season_number=1),
            Season(id="se3", show_id="s1", season_number=2),
        ),
        episodes=(
            _episode("e1", "s1", "se1", 1),
            _episode("e2", "s2", "se2", 1),
            _episode("e3", "s1", "se3", 1),
            _episode("e4", "s1", "se1", 2),
        ),
    )


class TestEntities:
    def test_show_defaults(self) -> None:
        show = Show(id="x", name="Name")
        assert show.description == ""
        assert show.poster_url == ""

    def test_episode_duration_defaults_to_none(self) -> None:
        assert _episode("e", "s", "se", 1).duration is None

    def test_entities_are_frozen(self) -> None:
        show = Show(id="x", name="Name")
        with pytest.raises(dataclasses.FrozenInstanceError):
            show.name = "Other"  # type: ignore[misc]


class TestSnapshotQueries:
    def test_find_by_id(self, snap: CatalogSnapshot) -> None:
        assert snap.find_show("s2").name == "Beta"
        assert snap.find_season("se3").season_number == 2
        assert snap.find_episode("e4").episode_number == 2

    def test_find_unknown_returns_none(self, snap: CatalogSnapshot) -> None:
        assert snap.find_show("nope") is None
        assert snap.find_season("nope") is None
        assert snap.find_episode("nope") is None

    def test_seasons_for_show_keeps_store_order(self, snap: CatalogSnapshot) -> None:
        assert [s.id for s in snap.seasons_for_show("s1")] == ["se1", "se3"]

    def test_episodes_for_season_keeps_store_order(
        self, snap: CatalogSnapshot
    ) -> None:
        assert [e.id for e in snap.episodes_for_season("se1")] == ["e1", "e4"]

    def test_episodes_for_show(self, snap: CatalogSnapshot) -> None:
        assert [e.id for e in snap.episodes_for_show("s1")] == ["e1", "e3", "e4"]

    def test_filters_are_idempotent(self, snap: CatalogSnapshot) -> None:
        assert snap.seasons_for_show("s1") == snap.seasons_for_show("s1")
        assert snap.episodes_for_season("se1") == snap.episodes_for_season("se1")

    def test_unknown_parent_yields_empty(self, snap: CatalogSnapshot) -> None:
        assert snap.seasons_for_show("missing") == []
        assert snap.episodes_for_season("missing") == []


class TestCascadePlan:
    def test_show_cascade_collects_descendants(self, snap: CatalogSnapshot) -> None:
        plan = snap.show_cascade("s1")
        assert plan.show_ids == ("s1",)
        assert plan.season_ids == ("se1", "se3")
        assert plan.episode_ids == ("e1", "e3", "e4")
        assert plan.total == 6

    def test_show_cascade_leaves_other_shows(self, snap: CatalogSnapshot) -> None:
        plan = snap.show_cascade("s1")
        assert "se2" not in plan.season_ids
        assert "e2" not in plan.episode_ids

    def test_show_cascade_includes_episode_with_stale_season(self) -> None:
        snap = CatalogSnapshot(
            shows=(Show(id="s1", name="Alpha"),),
            episodes=(_episode("orphan", "s1", "gone", 1),),
        )
        assert snap.show_cascade("s1").episode_ids == ("orphan",)

    def test_season_cascade(self, snap: CatalogSnapshot) -> None:
        plan = snap.season_cascade("se1")
        assert plan.show_ids == ()
        assert plan.season_ids == ("se1",)
        assert plan.episode_ids == ("e1", "e4")

    def test_empty_plan_total(self) -> None:
        assert CascadePlan().total == 0


class TestErrors:
    def test_hierarchy(self) -> None:
        for exc_type in (
            CatalogValidationError,
            CatalogIntegrityError,
            CatalogNotFoundError,
            CatalogExternalError,
        ):
            assert issubclass(exc_type, CatalogError)

    def test_validation_error_names_field(self) -> None:
        err = CatalogValidationError("season_number", "is required")
        assert err.field == "season_number"
        assert err.message == "is required"
        assert str(err) == "season_number: is required"

    def test_not_found_error_carries_entity(self) -> None:
        err = CatalogNotFoundError("episode", "abc")
        assert err.entity == "episode"
        assert err.entity_id == "abc"
        assert "abc" in str(err)


class TestResolvedVideoSource:
    def test_as_dict(self) -> None:
        src = ResolvedVideoSource(kind=VideoProvider.VIMEO, url="https://v")
        assert src.as_dict() == {"kind": "vimeo", "url": "https://v"}

    def test_provider_values(self) -> None:
        assert [p.value for p in VideoProvider] == [
            "youtube",
            "googledrive",
            "vimeo",
            "direct",
        ]
