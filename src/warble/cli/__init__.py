"""Warble CLI — route table listing and translation coverage.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble — localized routes and URL helpers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warble routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the localized route table")
    routes_parser.add_argument(
        "router",
        help="Router location, module[:attr.path] (e.g. myapp:router)",
    )
    routes_parser.add_argument(
        "--canonical",
        action="store_true",
        help="Show routes as declared, before localization",
    )

    # -- warble check -----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Report missing route translations")
    check_parser.add_argument(
        "router",
        help="Router location, module[:attr.path] (e.g. myapp:router)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from warble.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from warble.cli._check import run_check

        run_check(args)
