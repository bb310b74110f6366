"""CLI entry point for the talent search service."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from talentsearch.core.config import Settings
from talentsearch.core.params import Params
from talentsearch.core.schemas import Talent
from talentsearch.engine.elastic import ElasticsearchEngine
from talentsearch.pipeline.orchestrator import TalentSearch


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--index",
        help="Target index (default: the one in the settings file)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Talent search - query, index and reset the talent index",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- search subcommand ---
    search_parser = subparsers.add_parser("search", help="Search talents")
    search_parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Query string, e.g. 'work_roles[]=DevOps&keywords=rust'",
    )
    _add_common(search_parser)

    # --- index subcommand ---
    index_parser = subparsers.add_parser("index", help="Index talents from a JSON file")
    index_parser.add_argument(
        "file",
        help="JSON file holding one talent object or a list of them",
    )
    _add_common(index_parser)

    # --- reset subcommand ---
    reset_parser = subparsers.add_parser(
        "reset",
        help="Drop and recreate the index (all documents are lost)",
    )
    _add_common(reset_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_talents(path: str | Path) -> list[Talent]:
    """Read one talent or a list of talents from a JSON file."""
    path = Path(path)
    if not path.exists():
        msg = f"Talent file not found: {path}"
        raise FileNotFoundError(msg)
    raw: Any = json.loads(path.read_text())
    items = raw if isinstance(raw, list) else [raw]
    return [Talent.model_validate(item) for item in items]


def cmd_search(talents: TalentSearch, args: argparse.Namespace) -> None:
    params = Params.from_query_string(args.query)
    if args.index:
        params = params.with_default("index", args.index)
    print(json.dumps(talents.search(params)))


def cmd_index(talents: TalentSearch, args: argparse.Namespace) -> None:
    batch = load_talents(args.file)
    ok = talents.index_all(batch, args.index)
    talents.refresh(args.index)
    print(f"Indexed {len(batch)} talents" + ("" if ok else " (some writes not acknowledged)"))


def cmd_reset(talents: TalentSearch, args: argparse.Namespace) -> None:
    talents.reset_index(args.index)
    print(f"Index '{args.index or talents.default_index}' reset. Re-index all talents now.")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    engine = ElasticsearchEngine.from_config(settings.elasticsearch)
    talents = TalentSearch(engine, settings)

    try:
        if args.command == "index":
            cmd_index(talents, args)
        elif args.command == "reset":
            cmd_reset(talents, args)
        else:
            cmd_search(talents, args)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        engine.close()


if __name__ == "__main__":
    main()
