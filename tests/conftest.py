"""
- Spins up an in-process fake of the Mastermind server (FastAPI + TestClient)
- Provides a stub HTTP object with scripted responses for edge cases
- Provides a fake SessionClient and a scripted console for controller tests
"""
from collections import Counter
from typing import Dict, List, Optional
from uuid import uuid4

import pytest
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from pydantic import BaseModel

from mastermind_cli.api_client import SessionClient
from mastermind_cli.controller import GameController
from mastermind_cli.schemas import GuessResponse

FAKE_BASE_URL = "http://testserver"


# ---------------- Fake server ----------------

def score(secret: str, guess: str):
    """Classic black/white pegs: white never double-counts a black."""
    black = sum(1 for s, g in zip(secret, guess) if s == g)
    overlap = sum((Counter(secret) & Counter(guess)).values())
    return black, overlap - black


class FakeGuessIn(BaseModel):
    game_id: str
    guess: str


def build_fake_server(secret: str = "1234") -> FastAPI:
    app = FastAPI(title="Fake Mastermind server")
    games: Dict[str, str] = {}
    app.state.games = games

    @app.post("/game")
    def create_game():
        game_id = uuid4().hex
        games[game_id] = secret
        return {"game_id": game_id}

    @app.post("/guess")
    def make_guess(payload: FakeGuessIn):
        code = games.get(payload.game_id)
        if code is None:
            return JSONResponse(status_code=404, content={"error": "Game not found"})
        if len(payload.guess) != len(code):
            return JSONResponse(status_code=400, content={"error": "Invalid guess"})
        black, white = score(code, payload.guess)
        return {"black": black, "white": white}

    @app.delete("/game/{game_id}")
    def delete_game(game_id: str):
        if games.pop(game_id, None) is None:
            return JSONResponse(status_code=404, content={"error": "Game not found"})
        return Response(status_code=204)

    return app


@pytest.fixture
def fake_server() -> FastAPI:
    return build_fake_server(secret="1234")


@pytest.fixture
def api(fake_server) -> SessionClient:
    # TestClient speaks the requests-style .request() API that SessionClient uses
    return SessionClient(FAKE_BASE_URL, timeout=5, http=TestClient(fake_server))


# ---------------- Stub HTTP ----------------

class StubResponse:
    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class StubHttp:
    """Returns (or raises) queued items in order and records every call."""

    def __init__(self):
        self.queue: List[object] = []
        self.calls: List[dict] = []
        self.closed = False

    def reply(self, status_code: int, content: bytes = b"") -> "StubHttp":
        self.queue.append(StubResponse(status_code, content))
        return self

    def fail(self, exc: Exception) -> "StubHttp":
        self.queue.append(exc)
        return self

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


@pytest.fixture
def stub_http() -> StubHttp:
    return StubHttp()


@pytest.fixture
def stub_api(stub_http) -> SessionClient:
    return SessionClient(FAKE_BASE_URL, timeout=7, http=stub_http)


# ---------------- Controller helpers ----------------

class FakeClient:
    """Stands in for SessionClient; results are queued per operation."""

    def __init__(self):
        self.create_result: object = "abc"
        self.guess_results: List[object] = []
        self.delete_result: Optional[Exception] = None
        self.delete_hook = None
        self.calls: List[tuple] = []

    def create(self):
        self.calls.append(("create",))
        if isinstance(self.create_result, Exception):
            raise self.create_result
        return self.create_result

    def guess(self, game_id, text):
        self.calls.append(("guess", game_id, text))
        item = self.guess_results.pop(0)
        if isinstance(item, Exception):
            raise item
        black, white = item
        return GuessResponse(black=black, white=white)

    def delete(self, game_id):
        self.calls.append(("delete", game_id))
        if self.delete_hook is not None:
            self.delete_hook()
        if self.delete_result is not None:
            raise self.delete_result

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


class Console:
    """Feeds scripted lines to the controller and captures what it prints."""

    def __init__(self):
        self.lines: List[object] = []
        self.prompts: List[str] = []
        self.output: List[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        item = self.lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def write(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def console() -> Console:
    return Console()


@pytest.fixture
def make_controller(console):
    def _make(client, delete_wait_seconds: float = 2.0) -> GameController:
        return GameController(
            client,
            read_line=console.read_line,
            write=console.write,
            delete_wait_seconds=delete_wait_seconds,
        )
    return _make
