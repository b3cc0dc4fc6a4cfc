from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from zipmiles.models import DistanceFailure, ValidationOutcome
from zipmiles.postal import InvalidFormatError
from zipmiles.service import build_service_from_path

LOG = logging.getLogger(__name__)

EXIT_UNRESOLVED = 1
EXIT_BAD_INPUT = 2


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _print_outcome(console: Console, outcome: ValidationOutcome) -> None:
    style = "green" if outcome.is_valid else "red"
    console.print(f"[{style}]{outcome}[/{style}]")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="zipmiles")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--config", default=None, help="YAML engine config")

    sub = parser.add_subparsers(dest="command", required=True)

    distance = sub.add_parser("distance", help="road miles between two postal codes")
    distance.add_argument("origin")
    distance.add_argument("destination")

    validate = sub.add_parser("validate", help="check a postal code")
    validate.add_argument("code")

    check = sub.add_parser("check", help="sanity-check a distance before billing")
    check.add_argument("origin")
    check.add_argument("destination")
    check.add_argument("miles", type=float)

    web = sub.add_parser("web")
    web.add_argument("--host", default="0.0.0.0")
    web.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    console = Console(soft_wrap=True)

    if args.command == "web":
        import uvicorn

        uvicorn.run("zipmiles.api:app", host=args.host, port=args.port, reload=False)
        return 0

    service = build_service_from_path(args.config)

    if args.command == "validate":
        outcome = service.validate_postal_code(args.code)
        _print_outcome(console, outcome)
        return 0 if outcome.is_valid else EXIT_BAD_INPUT

    if args.command == "check":
        outcome = service.validate_distance(args.origin, args.destination, args.miles)
        _print_outcome(console, outcome)
        console.print(service.guard.sanity_check_message(args.miles))
        return 0 if outcome.is_valid else EXIT_BAD_INPUT

    if args.command == "distance":
        try:
            result = service.resolve_distance(args.origin, args.destination)
        except InvalidFormatError as exc:
            LOG.error("invalid postal code: %s", exc)
            return EXIT_BAD_INPUT
        if isinstance(result, DistanceFailure):
            LOG.error("%s", result)
            return EXIT_UNRESOLVED
        console.print(service.describe_distance(result.miles))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
