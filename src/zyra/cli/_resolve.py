"""Locate the App behind a ``module:attribute`` string.

Used by ``zyra run`` and ``zyra routes``.
"""

import importlib

from zyra.app import App


def resolve_app(target: str) -> App:
    """Import *target* and return the zyra App it names.

    ``"pkg.web:app"`` looks up ``app`` in ``pkg.web``; ``"pkg.web"`` alone
    means the same. If the attribute is a plain callable rather than an
    App, it is treated as an app factory and called without arguments.

    Raises ``ModuleNotFoundError`` or ``AttributeError`` when the lookup
    fails, and ``TypeError`` when it does not end in an App.
    """
    module_name, _, attr = target.partition(":")
    found = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(found, App) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(found, App):
        return found
    msg = f"{target!r} resolved to {type(found).__name__}, not a zyra.App instance"
    raise TypeError(msg)
