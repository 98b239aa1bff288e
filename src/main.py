"""Main CLI interface for the NCAA Four Factors dataset."""

import argparse
import logging
import sys

from .data.errors import DiscoveryError, PayloadValidationError
from .data.ingestion.season_pipeline import SeasonIngestionConfig, SeasonIngestionPipeline
from .data.repository import SeasonDataRepository, available_seasons
from .data.scrapers.espn_client import ClientConfig
from .models.season import GENDERS, Season

COMMANDS = ("ingest", "standings")


def season_arg(value: str) -> Season:
    """argparse type for ``YYYY-YY`` season labels."""
    try:
        return Season.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _genders(value: str):
    return list(GENDERS) if value == "all" else [value]


def ingest_season(args):
    """Ingest one season for the requested gender(s) and write the dataset."""
    configure_logging(args.verbose)
    season = args.season or Season.current()
    config = SeasonIngestionConfig(
        season=season,
        genders=_genders(args.gender),
        output_dir=args.output_dir,
        client=ClientConfig(
            request_delay_seconds=args.request_delay,
            max_attempts=args.max_attempts,
        ),
        strict_validation=not args.allow_invalid_payloads,
    )
    pipeline = SeasonIngestionPipeline(config)

    status = 0
    for gender in config.genders:
        try:
            manifest = pipeline.run(gender)
        except (DiscoveryError, PayloadValidationError) as exc:
            print(f"✗ {gender} {season}: {exc}")
            status = 1
            continue
        counts = manifest["counts"]
        print(
            f"✓ {gender} {season}: {counts['teams']} teams, {counts['games']} games, "
            f"{len(manifest['dropped_game_ids'])} dropped -> {manifest['output_dir']}"
        )
    return status


def show_standings(args):
    """Print a standings table from materialized data."""
    configure_logging(args.verbose)
    season = args.season
    if season is None:
        seasons = available_seasons(args.data_dir, args.gender)
        if not seasons:
            print(f"Error: no {args.gender} data found under {args.data_dir}")
            print("Create it first with:")
            print(f"  python -m src.main ingest --gender {args.gender} --output-dir {args.data_dir}")
            return 1
        season = seasons[0]

    try:
        repo = SeasonDataRepository.load(args.data_dir, args.gender, season)
    except FileNotFoundError:
        print(f"Error: no {args.gender} {season} data found under {args.data_dir}")
        return 1

    frame = repo.standings_frame(args.conference)
    if frame.empty:
        print(f"No standings rows for {args.gender} {season}" + (f" conference {args.conference}" if args.conference else ""))
        return 1

    columns = ["teamName", "conference", "wins", "losses", "confWins", "confLosses", "efg", "tov", "orb", "ftr"]
    print(f"\n{'='*60}")
    print(f"STANDINGS - {args.gender.upper()} {season}")
    print(f"{'='*60}\n")
    print(frame[columns].to_string(index=False, float_format=lambda v: f"{v:.1f}"))
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="NCAA Four Factors - box score ingestion and season standings"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    ingest_parser = subparsers.add_parser("ingest", help="Fetch a season and write teams/games/standings")
    ingest_parser.add_argument("--season", type=season_arg, default=None, help="Season label, e.g. 2025-26 (default: current)")
    ingest_parser.add_argument("--gender", choices=list(GENDERS) + ["all"], default="all")
    ingest_parser.add_argument("--output-dir", default="data", help="Dataset root directory")
    ingest_parser.add_argument("--request-delay", type=non_negative_float, default=0.05, help="Seconds to wait after each request")
    ingest_parser.add_argument("--max-attempts", type=positive_int, default=3, help="Attempts per request before giving up")
    ingest_parser.add_argument(
        "--allow-invalid-payloads",
        action="store_true",
        help="Write output even when consistency checks fail (errors are kept in the manifest)",
    )
    ingest_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    standings_parser = subparsers.add_parser("standings", help="Print standings from materialized data")
    standings_parser.add_argument("--season", type=season_arg, default=None, help="Season label (default: latest available)")
    standings_parser.add_argument("--gender", choices=list(GENDERS), default="mens")
    standings_parser.add_argument("--data-dir", default="data", help="Dataset root directory")
    standings_parser.add_argument("--conference", default=None, help="Restrict to one conference id")
    standings_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS + ("-h", "--help"):
        argv.insert(0, "ingest")
    args = parser.parse_args(argv)

    if args.command == "standings":
        return show_standings(args)
    return ingest_season(args)


if __name__ == "__main__":
    sys.exit(main())
