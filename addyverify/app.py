import argparse
from pathlib import Path

from . import __version__
from .database import Location, add_location, get_location, get_session, init_database, list_locations
from .engine import AddyVerifier
from .env import get_settings, load_env
from .errors import AddyError
from .logger import get_logger

logger = get_logger()


def _add_address_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--street1", required=True, help="Street line 1, e.g. \"80A Queen Street\"")
    parser.add_argument("--street2", default="", help="Street line 2 (suburb, unit, ...)")
    parser.add_argument("--city", default="", help="Town or city")
    parser.add_argument("--state", default="", help="Region or state")
    parser.add_argument("--postal-code", default="", help="Postal code")


def _build_verifier(args: argparse.Namespace) -> AddyVerifier:
    settings = get_settings()
    if args.api_key:
        settings.api_key = args.api_key
    if args.api_secret:
        settings.api_secret = args.api_secret
    return AddyVerifier.from_settings(settings)


def _print_location(location: Location) -> None:
    print(f"  Street1: {location.street1}")
    print(f"  Street2: {location.street2}")
    print(f"  City: {location.city}")
    print(f"  State: {location.state}")
    print(f"  Postal code: {location.postal_code}")
    print(f"  Coordinates: {location.latitude}, {location.longitude}")


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else get_settings().db_path


def cmd_verify(args: argparse.Namespace) -> None:
    location = Location(
        street1=args.street1,
        street2=args.street2,
        city=args.city,
        state=args.state,
        postal_code=args.postal_code,
    )
    try:
        verifier = _build_verifier(args)
        outcome, message = verifier.verify_location(location)
    except AddyError as e:
        raise SystemExit(str(e))
    print(f"Outcome: {outcome.value}")
    print(f"Message: {message}")
    _print_location(location)


def cmd_add(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    session = get_session(db_path)
    try:
        location = add_location(
            session,
            street1=args.street1,
            street2=args.street2,
            city=args.city,
            state=args.state,
            postal_code=args.postal_code,
        )
        print(f"Added location {location.id}")
    finally:
        session.close()


def cmd_verify_location(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}")
    session = get_session(db_path)
    try:
        location = get_location(session, args.id)
        if location is None:
            raise SystemExit(f"Location not found: {args.id}")
        try:
            verifier = _build_verifier(args)
            outcome, message = verifier.verify_location(location)
        except AddyError as e:
            # keep the attempt stamps
            session.commit()
            raise SystemExit(str(e))
        session.commit()
        print(f"Outcome: {outcome.value}")
        print(f"Message: {message}")
        _print_location(location)
    finally:
        session.close()


def cmd_list(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Database not found: {db_path}")
        return
    session = get_session(db_path)
    try:
        locations = list_locations(session)
        if not locations:
            print("No locations in database.")
            return
        print(f"Found {len(locations)} locations in {db_path}:\n")
        for location in locations:
            print(f"ID: {location.id}")
            _print_location(location)
            print(f"  Last attempt: {location.standardize_attempted_at} ({location.standardize_attempted_service})")
            print()
    finally:
        session.close()


def main():
    # Load .env if present (ADDY_API_KEY, ADDY_API_SECRET, etc.)
    load_env()
    try:
        logger.set_level(get_settings().log_level)
    except ValueError as e:
        raise SystemExit(f"Invalid ADDY_LOG_LEVEL: {e}")
    parser = argparse.ArgumentParser(prog="addyverify", description="Standardize and geocode NZ addresses with Addy")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    ver = subparsers.add_parser("verify", help="Verify an address without storing it")
    _add_address_args(ver)
    ver.add_argument("--api-key", help="Addy API key (or set ADDY_API_KEY)")
    ver.add_argument("--api-secret", help="Addy API secret (or set ADDY_API_SECRET)")
    ver.set_defaults(func=cmd_verify)

    add = subparsers.add_parser("add", help="Store a location in the database")
    _add_address_args(add)
    add.add_argument("--db", help="Path to SQLite database (default: ADDY_DB_PATH or data/locations.db)")
    add.set_defaults(func=cmd_add)

    verl = subparsers.add_parser("verify-location", help="Verify a stored location and save the result")
    verl.add_argument("--id", type=int, required=True, help="Location id")
    verl.add_argument("--db", help="Path to SQLite database (default: ADDY_DB_PATH or data/locations.db)")
    verl.add_argument("--api-key", help="Addy API key (or set ADDY_API_KEY)")
    verl.add_argument("--api-secret", help="Addy API secret (or set ADDY_API_SECRET)")
    verl.set_defaults(func=cmd_verify_location)

    lst = subparsers.add_parser("list", help="List stored locations")
    lst.add_argument("--db", help="Path to SQLite database (default: ADDY_DB_PATH or data/locations.db)")
    lst.set_defaults(func=cmd_list)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        if args.command.startswith("verify"):
            logger.log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
