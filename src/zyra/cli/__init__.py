"""Zyra CLI: project scaffolding, server, and route listing.

Entry point registered as ``zyra`` in ``pyproject.toml``::

    [project.scripts]
    zyra = "zyra.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``zyra`` command."""
    parser = argparse.ArgumentParser(
        prog="zyra",
        description="Zyra: a minimal async HTTP routing and middleware framework.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- zyra new ---------------------------------------------------------
    new_parser = subparsers.add_parser("new", help="Create a new project")
    new_parser.add_argument("name", help="Project directory name")
    new_parser.add_argument(
        "--minimal",
        action="store_true",
        help="Generate a minimal single-file project",
    )

    # -- zyra run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- zyra routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "new":
        from zyra.cli._new import create_project

        create_project(args)
    elif args.command == "run":
        from zyra.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from zyra.cli._routes import run_routes

        run_routes(args)
