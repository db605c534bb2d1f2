"""Tests for zyra.cli: resolve, routes, and run subcommands."""

import sys
import types

import pytest

from zyra.app import App
from zyra.cli import main
from zyra.cli._resolve import resolve_app
from zyra.cli._routes import format_routes


def list_users(req, res) -> None:
    res.json([])


async def show_user(req, res) -> None:
    res.json({"id": req.params["id"]})


def _build_app() -> App:
    app = App()
    app.get("/", list_users)
    with app.group("/users") as users:
        users.get("/:id", show_user)
        users.delete("/:id", list_users, show_user)
    return app


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a zyra App on sys.modules."""
    mod = types.ModuleType("_fake_zyra_app")
    mod.app = _build_app()  # type: ignore[attr-defined]
    mod.empty = App()  # type: ignore[attr-defined]
    mod.create_app = _build_app  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_zyra_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_zyra_app:app"), App)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert isinstance(resolve_app("_fake_zyra_app"), App)

    def test_factory(self) -> None:
        app = resolve_app("_fake_zyra_app:create_app")
        assert len(app.routes) == 3

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_zyra_app:does_not_exist")

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="not a zyra.App instance"):
            resolve_app("_fake_zyra_app:not_an_app")


class TestFormatRoutes:
    def test_table(self) -> None:
        lines = format_routes(_build_app().routes).splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["GET", "/", "list_users"]
        assert lines[3].split() == ["GET", "/users/:id", "show_user"]
        assert lines[4].split() == ["DELETE", "/users/:id", "list_users,", "show_user"]


@pytest.mark.usefixtures("_fake_app_module")
class TestRoutesCommand:
    def test_prints_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_zyra_app:app"])
        out = capsys.readouterr().out
        assert "/users/:id" in out
        assert out.index("list_users") < out.index("show_user")

    def test_no_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_zyra_app:empty"])
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_zyra_app:not_an_app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_app_module")
class TestRunCommand:
    def test_passes_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str | None, int | None]] = []

        def fake_run(self: App, host: str | None = None, port: int | None = None) -> None:
            calls.append((host, port))

        monkeypatch.setattr(App, "run", fake_run)
        main(["run", "_fake_zyra_app:app", "--host", "0.0.0.0", "--port", "9000"])
        assert calls == [("0.0.0.0", 9000)]

    def test_defaults_to_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        served: list[tuple[str, int]] = []

        def fake_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
            served.append((host, port))

        monkeypatch.setattr("zyra.server.dev.run_server", fake_server)
        main(["run", "_fake_zyra_app:app"])
        assert served == [("127.0.0.1", 8000)]


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: zyra" in capsys.readouterr().out
