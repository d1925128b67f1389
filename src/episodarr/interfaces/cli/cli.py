from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import structlog

from episodarr.application.use_cases import CatalogHierarchyUseCase
from episodarr.domain.entities import (
    CascadePlan,
    CatalogError,
    CatalogExternalError,
)
from episodarr.infrastructure.composition import catalog_session
from episodarr.infrastructure.config import load_config
from episodarr.infrastructure.logging.setup import configure_logging
from episodarr.infrastructure.persistence.catalog_records import (
    episode_to_record,
    season_to_record,
    show_to_record,
)
from episodarr.infrastructure.video_sources import resolve

log = structlog.get_logger(__name__)

_KINDS = ("show", "season", "episode")

_TO_RECORD: dict[str, Callable[[Any], dict[str, Any]]] = {
    "show": show_to_record,
    "season": season_to_record,
    "episode": episode_to_record,
}


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="episodarr")

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--backend",
        default=None,
        choices=["memory", "diskcache", "http"],
        help="Override catalog store backend.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    p_resolve = commands.add_parser(
        "resolve", help="Print the embeddable form of a raw video link."
    )
    p_resolve.add_argument("url")

    commands.add_parser("tree", help="Print the catalog grouped by show and season.")

    p_add = commands.add_parser("add", help="Create a show, season or episode.")
    p_add.add_argument("kind", choices=_KINDS)
    p_add.add_argument("fields", nargs="*", metavar="key=value")

    p_update = commands.add_parser(
        "update", help="Replace the fields of an existing record."
    )
    p_update.add_argument("kind", choices=_KINDS)
    p_update.add_argument("id")
    p_update.add_argument("fields", nargs="*", metavar="key=value")

    p_delete = commands.add_parser(
        "delete", help="Delete a record and everything below it."
    )
    p_delete.add_argument("kind", choices=_KINDS)
    p_delete.add_argument("id")
    p_delete.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the irreversible delete (children are removed too).",
    )

    return parser.parse_args(argv)


def _parse_fields(pairs: Iterable[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected key=value, got: {pair!r}")
        out[key.strip()] = value
    return out


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _print_tree(use_case: CatalogHierarchyUseCase) -> None:
    trees = use_case.tree()
    if not trees:
        print("(empty catalog)")
        return
    for node in trees:
        print(f"{node.show.name} [{node.show.id}]")
        for season, episodes in node.seasons:
            label = season.name or f"Season {season.season_number}"
            print(f"  S{season.season_number:02d} {label} [{season.id}]")
            for episode in episodes:
                title = episode.title or f"Episode {episode.episode_number}"
                kind = use_case.resolve_video_url(episode.video_url).kind
                print(
                    f"    E{episode.episode_number:02d} {title} "
                    f"({kind.value}) [{episode.id}]"
                )


def _plan_dict(plan: CascadePlan) -> dict[str, Any]:
    return {
        "shows": list(plan.show_ids),
        "seasons": list(plan.season_ids),
        "episodes": list(plan.episode_ids),
        "total": plan.total,
    }


def _run_catalog_command(
    args: argparse.Namespace, use_case: CatalogHierarchyUseCase
) -> int:
    if args.command == "tree":
        _print_tree(use_case)
        return 0

    if args.command == "add":
        data = _parse_fields(args.fields)
        create = {
            "show": use_case.create_show,
            "season": use_case.create_season,
            "episode": use_case.create_episode,
        }[args.kind]
        _print_json(_TO_RECORD[args.kind](create(data)))
        return 0

    if args.command == "update":
        data = _parse_fields(args.fields)
        update = {
            "show": use_case.update_show,
            "season": use_case.update_season,
            "episode": use_case.update_episode,
        }[args.kind]
        _print_json(_TO_RECORD[args.kind](update(args.id, data)))
        return 0

    if args.command == "delete":
        delete = {
            "show": use_case.delete_show,
            "season": use_case.delete_season,
            "episode": use_case.delete_episode,
        }[args.kind]
        _print_json(_plan_dict(delete(args.id)))
        return 0

    raise ValueError(f"unknown command: {args.command}")


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config once, configures logging, then runs a single command
    against the configured catalog store.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.backend:
        cli_overrides["catalog_backend"] = args.backend
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    configure_logging(config)

    # Pure resolution needs no store.
    if args.command == "resolve":
        _print_json(resolve(args.url).as_dict())
        return 0

    if args.command == "delete" and not args.yes:
        print(
            f"refusing to delete {args.kind} {args.id} without --yes",
            file=sys.stderr,
        )
        return 1

    try:
        with catalog_session(config) as use_case:
            return _run_catalog_command(args, use_case)
    except argparse.ArgumentTypeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except CatalogExternalError as e:
        log.error("catalog_command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 2
    except CatalogError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(start())
