"""Project scaffolding templates: plain Python strings for ``zyra new``.

Simple ``str.format()`` substitution with ``{name}`` for the project name,
so literal braces in the generated code are doubled.
"""

# ---------------------------------------------------------------------------
# Full project (default)
# ---------------------------------------------------------------------------

APP_PY = """\
import logging
import time

from zyra import App, cors

logger = logging.getLogger("{name}")

app = App()
app.use(cors())

USERS = [
    {{"id": 1, "name": "Ada Lovelace", "email": "ada@example.com"}},
    {{"id": 2, "name": "Alan Turing", "email": "alan@example.com"}},
]


async def log_requests(req, res, advance):
    started = time.perf_counter()
    await advance()
    elapsed = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %d (%.1fms)", req.method, req.path, res.status_code, elapsed)


app.use(log_requests)


@app.get("/")
async def index(req, res):
    res.json({{"message": "Welcome to {name}!"}})


def users_routes(users):
    @users.get("/")
    async def list_users(req, res):
        res.json(USERS)

    @users.get("/:id")
    async def show_user(req, res):
        for user in USERS:
            if str(user["id"]) == req.params["id"]:
                res.json(user)
                return
        res.status(404).json({{"error": "User not found"}})

    @users.post("/")
    async def create_user(req, res):
        body = req.body or {{}}
        if not body.get("name") or not body.get("email"):
            res.status(400).json({{"error": "Name and email are required"}})
            return
        user = {{"id": len(USERS) + 1, "name": body["name"], "email": body["email"]}}
        USERS.append(user)
        res.status(201).json(user)


app.group("/api/users", users_routes)


if __name__ == "__main__":
    app.run()
"""

TEST_APP_PY = """\
from app import app

from zyra.testing import TestClient


async def test_index() -> None:
    async with TestClient(app) as client:
        response = await client.get("/")
        assert response.status == 200
        assert response.json() == {{"message": "Welcome to {name}!"}}


async def test_show_user() -> None:
    async with TestClient(app) as client:
        response = await client.get("/api/users/1")
        assert response.status == 200
        assert response.json()["name"] == "Ada Lovelace"


async def test_create_user_requires_fields() -> None:
    async with TestClient(app) as client:
        response = await client.post("/api/users", json={{"name": "Grace"}})
        assert response.status == 400
"""

README_MD = """\
# {name}

A [zyra](https://pypi.org/project/zyra/) application.

## Run

```bash
python app.py
```

The server listens on http://127.0.0.1:8000.

## Routes

```bash
zyra routes app:app
```

## Test

```bash
pytest
```
"""

# ---------------------------------------------------------------------------
# Minimal project (--minimal)
# ---------------------------------------------------------------------------

MINIMAL_APP_PY = """\
from zyra import App

app = App()


@app.get("/")
async def index(req, res):
    res.send("Welcome to {name}!")


if __name__ == "__main__":
    app.run()
"""

PYTEST_INI = """\
[pytest]
asyncio_mode = auto
pythonpath = .
"""
