"""
HTTP adapter for the remote Mastermind service.

Endpoints used:
POST   /game              -> start a session, returns {"game_id": ...}
POST   /guess             -> {"game_id", "guess"} in, {"black", "white"} out
DELETE /game/{game_id}    -> end a session (204, 404 also counts as gone)

Every call either returns the decoded payload or raises exactly one of the
ApiError subclasses from errors.py. Nothing is retried here.
"""

import logging
import re
from typing import Optional, Type, TypeVar
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from .errors import (
    ApiRejection,
    DecodeFailure,
    EmptyResponse,
    InvalidTarget,
    TransportFailure,
    UnexpectedStatus,
)
from .schemas import CreateGameResponse, ErrorResponse, GuessRequest, GuessResponse
from .types import GuessText, SessionId

logger = logging.getLogger(__name__)

Model = TypeVar("Model", bound=BaseModel)

# RFC 3986 unreserved characters: safe to put in a path segment as-is
_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9._~-]+$")

_HEADERS = {"Accept": "application/json"}


class SessionClient:
    """Create, guess against, and delete one game session on the server."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Anything with a requests-style .request(); tests pass a TestClient
        self.http = http if http is not None else requests.Session()
        self.current_game_id: Optional[SessionId] = None

    # --- Request helpers ---

    def _url(self, path: str) -> str:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidTarget(self.base_url, "base URL must be http(s)://host")
        return f"{self.base_url}{path}"

    def _game_path(self, game_id: SessionId) -> str:
        if not _SAFE_SEGMENT.match(game_id):
            raise InvalidTarget(f"/game/{game_id}", "game id is not a valid path segment")
        return f"/game/{game_id}"

    def _send(self, method: str, path: str, payload: Optional[dict] = None):
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(
                method,
                url,
                json=payload,
                headers=_HEADERS,
                timeout=self.timeout,
            )
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as exc:
            raise InvalidTarget(url, str(exc)) from exc
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportFailure(exc) from exc

        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        return response

    @staticmethod
    def _decode(model: Type[Model], response) -> Model:
        if not response.content:
            raise EmptyResponse(response.status_code)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailure(exc, response.status_code) from exc

    def _rejection(self, response) -> ApiRejection:
        # A body that isn't {"error": ...} surfaces as DecodeFailure
        body = self._decode(ErrorResponse, response)
        logger.warning("Server rejected request (HTTP %s): %s", response.status_code, body.error)
        return ApiRejection(response.status_code, body.error)

    # --- Public API ---

    def create(self) -> SessionId:
        response = self._send("POST", "/game")
        if response.status_code != 200:
            raise self._rejection(response)

        created = self._decode(CreateGameResponse, response)
        self.current_game_id = created.game_id
        logger.info("Created game %s", created.game_id)
        return created.game_id

    def guess(self, game_id: SessionId, text: GuessText) -> GuessResponse:
        # Raises ValueError (pydantic ValidationError) before any network I/O
        payload = GuessRequest(game_id=game_id, guess=text)

        response = self._send("POST", "/guess", payload.model_dump())
        if response.status_code != 200:
            raise self._rejection(response)

        feedback = self._decode(GuessResponse, response)
        logger.info("Guess %s on %s -> %sB %sW", text, game_id, feedback.black, feedback.white)
        return feedback

    def delete(self, game_id: Optional[SessionId]) -> None:
        if not game_id:
            # Nothing was ever created, so there is nothing to clean up
            logger.debug("No game id given; skipping delete")
            return

        response = self._send("DELETE", self._game_path(game_id))

        # 404 means the session is already gone, which is what we wanted
        if response.status_code in (204, 404):
            if self.current_game_id == game_id:
                self.current_game_id = None
            logger.info("Deleted game %s (HTTP %s)", game_id, response.status_code)
            return

        if not response.content:
            raise UnexpectedStatus(response.status_code)
        try:
            body = ErrorResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise UnexpectedStatus(response.status_code) from exc
        raise ApiRejection(response.status_code, body.error)

    def close(self) -> None:
        self.http.close()
