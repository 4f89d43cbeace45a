"""CLI entry point for the people search engine."""

import argparse
import logging
import sys

from src.api.client import ApiClient
from src.api.exceptions import ApiError
from src.core.config import Settings
from src.core.fixtures import load_candidates
from src.core.schemas import ALL_STATES, RankedResult
from src.pipeline.matcher import filter_candidate_records
from src.pipeline.orchestrator import (
    CandidateSource,
    FixtureSource,
    RemoteSource,
    export_response_json,
    run_search,
)
from src.pipeline.search_state import SearchSession


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="People search engine - rank person/organization records for a query",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Rank candidates for a query")
    search_parser.add_argument(
        "--query", "-q",
        default="",
        help="Free-text query (default: empty, matches everything)",
    )
    search_parser.add_argument(
        "--state",
        default=ALL_STATES,
        help=f"State/region filter (default: '{ALL_STATES}')",
    )
    search_parser.add_argument(
        "--candidates",
        help="Path to candidates YAML (default: data.candidates_path from settings)",
    )
    search_parser.add_argument(
        "--remote",
        action="store_true",
        help="Fetch candidates from the remote search API instead of the fixture file",
    )
    search_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )

    # --- filter subcommand ---
    filter_parser = subparsers.add_parser(
        "filter",
        help="Legacy first/last name + state filter over the fixture file",
    )
    filter_parser.add_argument("--first", default="", help="First name")
    filter_parser.add_argument("--last", default="", help="Last name")
    filter_parser.add_argument(
        "--state",
        default=ALL_STATES,
        help=f"State filter, case-sensitive (default: '{ALL_STATES}')",
    )
    filter_parser.add_argument("--candidates", help="Path to candidates YAML")

    # --- health subcommand ---
    subparsers.add_parser("health", help="Check the remote search API")

    for sub in subparsers.choices.values():
        sub.add_argument(
            "--config",
            default="config/settings.yaml",
            help="Path to settings YAML file (default: config/settings.yaml)",
        )
        sub.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose (DEBUG) logging",
        )

    args = parser.parse_args(argv)

    # Default to an empty-query search when no subcommand given
    if args.command is None:
        args = parser.parse_args(["search"])

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default file is absent."""
    try:
        return Settings.from_yaml(path)
    except FileNotFoundError:
        if path != "config/settings.yaml":
            raise
        return Settings()


def _format_result(r: RankedResult) -> str:
    return (f"  {r.rank:>2}. {r.name} ({r.location}) score={r.relevance_score} "
            f"coverage={r.coverage_ratio:.2f} {r.status}, updated {r.updated or 'n/a'}")


def cmd_search(args: argparse.Namespace, settings: Settings) -> None:
    """Handle search subcommand."""
    use_remote = args.remote or settings.source == "remote"
    session = SearchSession()

    if use_remote:
        with ApiClient(settings.api) as client:
            source: CandidateSource = RemoteSource(client)
            run = run_search(args.query, args.state, source, settings.ranking, session)
    else:
        path = args.candidates or settings.data.candidates_path
        source = FixtureSource(load_candidates(path))
        run = run_search(args.query, args.state, source, settings.ranking, session)

    if run is None:
        print(f"Error: {session.error_message}", file=sys.stderr)
        sys.exit(1)

    response = run.response
    if args.export == "json":
        print(export_response_json(response))
        return

    meta = response.meta
    print(f"Search '{args.query}' ({args.state}): {meta.total_candidates} candidates, "
          f"{meta.live_count} live, {meta.archived_count} archived, "
          f"freshest {meta.last_refresh_minutes}m ago")
    print(f"\nDirect matches ({len(response.primary)}):")
    for r in response.primary:
        print(_format_result(r))
    print(f"\nAdjacent matches ({len(response.related)}):")
    for r in response.related:
        print(_format_result(r))
    if meta.signal_coverage:
        print("\nSignal coverage:")
        for label, count in meta.signal_coverage.items():
            print(f"  {label}: {count}")


def cmd_filter(args: argparse.Namespace, settings: Settings) -> None:
    """Handle filter subcommand."""
    candidates = load_candidates(args.candidates or settings.data.candidates_path)
    results = filter_candidate_records(args.first, args.last, args.state, candidates)
    print(f"{len(results)} of {len(candidates)} records:")
    for c in results:
        print(f"  {c.name} ({c.location}) {c.status}")


def cmd_health(settings: Settings) -> None:
    """Handle health subcommand."""
    with ApiClient(settings.api) as client:
        health = client.health()
    print(f"{client.base_url}: {health.status}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "filter":
            cmd_filter(args, settings)
        elif args.command == "health":
            cmd_health(settings)
        else:
            cmd_search(args, settings)
    except (FileNotFoundError, ValueError, ApiError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
