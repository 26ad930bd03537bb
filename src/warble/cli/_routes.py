"""``warble routes`` — print the route table.

One row per concrete route: methods, path, action, helper name and the
locales that share it. ``--canonical`` prints the declared routes
instead, with untranslated paths and unsuffixed helper names.
"""

import argparse

from warble.cli._load import load_router

_HEADERS = ("METHOD", "PATH", "ACTION", "HELPER", "LOCALES")


def run_routes(args: argparse.Namespace) -> None:
    router = load_router(args.router)

    entries = router.canonical_routes() if args.canonical else router.route_info()
    if not entries:
        print("No routes registered.")
        return

    rows = [
        (
            ", ".join(entry["methods"]),
            entry["path"],
            entry["action"],
            entry["helper_name"] or "",
            ", ".join(entry["locales"]),
        )
        for entry in entries
    ]
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(_HEADERS)]
    fmt = "  ".join(f"{{:<{width}}}" for width in widths[:-1]) + "  {}"
    print(fmt.format(*_HEADERS))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row))
