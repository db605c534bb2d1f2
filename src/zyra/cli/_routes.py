"""``zyra routes``: list registered routes.

Routes print in registration order, which is also match precedence.
"""

import argparse
import sys

from zyra.cli._resolve import resolve_app
from zyra.routing.route import Route


def _handler_names(route: Route) -> str:
    return ", ".join(getattr(h, "__name__", type(h).__name__) for h in route.handlers)


def format_routes(routes: tuple[Route, ...]) -> str:
    """Render a METHOD / PATH / HANDLER table."""
    rows = [(str(route.method), route.pattern, _handler_names(route)) for route in routes]

    max_method = max(max((len(r[0]) for r in rows), default=0), 6)  # "METHOD" header
    max_path = max(max((len(r[1]) for r in rows), default=0), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    lines = [fmt.format("METHOD", "PATH", "HANDLER")]
    sep_len = max_method + max_path + 4 + max((len(r[2]) for r in rows), default=7)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(*row) for row in rows)
    return "\n".join(lines)


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return
    print(format_routes(routes))
