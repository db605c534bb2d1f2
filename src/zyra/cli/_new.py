"""``zyra new``: project scaffolding command.

Creates a new zyra project directory with starter files.  Two modes:

- **Default**: ``app.py`` with a logging middleware and a users API group,
  plus ``tests/test_app.py`` and ``README.md``
- **Minimal** (``--minimal``): a single ``app.py``
"""

import argparse
import re
import sys
from pathlib import Path

from zyra.cli._templates import APP_PY, MINIMAL_APP_PY, PYTEST_INI, README_MD, TEST_APP_PY

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_project_name(name: str) -> str | None:
    """Return an error message for an unusable project name, else ``None``."""
    if not name.strip():
        return "project name cannot be empty"
    if " " in name:
        return "project name cannot contain spaces"
    if not _NAME_RE.match(name):
        return "project name may only contain letters, digits, hyphens, and underscores"
    return None


def create_project(args: argparse.Namespace) -> None:
    """Generate a new zyra project directory.

    Creates the project at ``./<args.name>/`` relative to cwd.
    Refuses to overwrite an existing directory.
    """
    error = validate_project_name(args.name)
    if error is not None:
        print(f"Error: {error}", file=sys.stderr)
        raise SystemExit(1)

    project_dir = Path(args.name)

    if project_dir.exists():
        print(
            f"Error: directory '{args.name}' already exists",
            file=sys.stderr,
        )
        raise SystemExit(1)

    if args.minimal:
        _create_minimal(project_dir, args.name)
    else:
        _create_full(project_dir, args.name)

    print(f"Created project '{args.name}'")
    print()
    print(f"  cd {args.name} && python app.py")
    if not args.minimal:
        print(f"  cd {args.name} && pytest")


def _create_full(project_dir: Path, name: str) -> None:
    (project_dir / "tests").mkdir(parents=True)

    (project_dir / "app.py").write_text(APP_PY.format(name=name))
    (project_dir / "README.md").write_text(README_MD.format(name=name))
    (project_dir / "pytest.ini").write_text(PYTEST_INI)
    (project_dir / "tests" / "test_app.py").write_text(TEST_APP_PY.format(name=name))


def _create_minimal(project_dir: Path, name: str) -> None:
    project_dir.mkdir(parents=True)

    (project_dir / "app.py").write_text(MINIMAL_APP_PY.format(name=name))
