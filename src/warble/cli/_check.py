"""``warble check`` — translation coverage command.

Exits with code 1 if any localized path segment is missing from the
catalog for one of its locales.
"""

import argparse

from warble.check import check_translations
from warble.cli._load import load_router


def run_check(args: argparse.Namespace) -> None:
    router = load_router(args.router)

    result = check_translations(router)
    print(result.summary())
    if not result.ok:
        raise SystemExit(1)
