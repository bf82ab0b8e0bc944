"""
Game loop: one session, one guess in flight at a time.

Phases:
  INITIALIZING -> PLAYING -> TERMINATING -> TERMINATED
  INITIALIZING -> TERMINATING (create failed, nothing to clean up)

The controller owns the only piece of mutable state (the session id) and
always passes through TERMINATING, whichever way the game ends.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Dict, Optional

from .config import DEFAULT_DELETE_TIMEOUT
from .engine import (
    CODE_LENGTH,
    MAX_DIGIT,
    MIN_DIGIT,
    format_feedback,
    is_exit_command,
    is_valid_guess,
    normalize_input,
)
from .errors import ApiError, is_game_not_found
from .types import SessionId

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = (
    f"Invalid guess format. Please enter exactly {CODE_LENGTH} digits, "
    f"each between {MIN_DIGIT} and {MAX_DIGIT} (e.g., 1122)."
)


class Phase(str, Enum):
    INITIALIZING = "initializing"
    PLAYING = "playing"
    TERMINATING = "terminating"
    TERMINATED = "terminated"


class Outcome(str, Enum):
    WON = "won"
    QUIT = "quit"
    SESSION_LOST = "session_lost"
    STARTUP_FAILED = "startup_failed"


EXIT_CODES: Dict[Outcome, int] = {
    Outcome.WON: 0,
    Outcome.QUIT: 0,
    Outcome.SESSION_LOST: 1,
    Outcome.STARTUP_FAILED: 1,
}


def exit_code_for(outcome: Optional[Outcome]) -> int:
    if outcome is None:
        return 1
    return EXIT_CODES[outcome]


class GameController:
    def __init__(
        self,
        client,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        delete_wait_seconds: float = DEFAULT_DELETE_TIMEOUT,
    ) -> None:
        self.client = client
        self.read_line = read_line
        self.write = write
        self.delete_wait_seconds = delete_wait_seconds

        self.phase = Phase.INITIALIZING
        self.outcome: Optional[Outcome] = None
        self.game_id: Optional[SessionId] = None
        # Guesses the server actually scored; rejected input doesn't count
        self.attempts = 0

    # --- Entry point ---

    def run(self) -> Optional[Outcome]:
        try:
            self._initialize()
            while self.phase is Phase.PLAYING:
                self._step()
        except KeyboardInterrupt:
            self.write("\nGame interrupted.")
            self._finish(Outcome.QUIT)
        finally:
            self._terminate()
        return self.outcome

    # --- Phases ---

    def _initialize(self) -> None:
        self.write("Welcome to Mastermind! 🎲")
        self.write("Starting a new game with the server...")
        try:
            game_id = self.client.create()
        except ApiError as error:
            logger.error("Could not start a game: %s", error)
            self.write(f"⛔ Fatal: error starting game: {error}")
            self.write("Please check your internet connection and the API server status.")
            self._finish(Outcome.STARTUP_FAILED)
            return

        self.game_id = game_id
        self.phase = Phase.PLAYING
        self.write(f"Game started successfully. Your Game ID is: {game_id}")
        self.write(
            f"The code is {CODE_LENGTH} digits long. Each digit is between {MIN_DIGIT} and {MAX_DIGIT}."
        )
        self.write("Type your guess (e.g., 1234) or type 'exit' to quit at any time.")

    def _step(self) -> None:
        prompt = f"\nAttempt {self.attempts + 1}: Enter your {CODE_LENGTH}-digit guess: "
        try:
            raw = self.read_line(prompt)
        except EOFError:
            self.write("\nInput closed.")
            self._finish(Outcome.QUIT)
            return
        self.handle_line(raw)

    def handle_line(self, raw: str) -> None:
        """Apply one line of player input to the PLAYING phase."""
        text = normalize_input(raw)

        if is_exit_command(text):
            self._finish(Outcome.QUIT)
            return

        if not is_valid_guess(text):
            self.write(INVALID_FORMAT_MESSAGE)
            return

        try:
            feedback = self.client.guess(self.game_id, text)
        except ApiError as error:
            if is_game_not_found(error):
                logger.error("Game %s is gone on the server: %s", self.game_id, error)
                self.write(f"⛔ Fatal: error making guess: {error}")
                self.write("It seems the game session on the server was lost. Please restart the game.")
                # Server has no record of it, so there is nothing to delete
                self.game_id = None
                self._finish(Outcome.SESSION_LOST)
                return
            logger.warning("Guess %s failed: %s", text, error)
            self.write(f"🚨 Error making guess: {error}")
            return

        self.attempts += 1
        self.write(f"Feedback: {format_feedback(feedback.black, feedback.white)}")

        if feedback.is_win:
            self.write(
                f"\n🎉 Congratulations! You guessed the code {text} correctly "
                f"in {self.attempts} attempts! 🎉"
            )
            self._finish(Outcome.WON)

    def _finish(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.phase = Phase.TERMINATING

    def _terminate(self) -> None:
        if self.phase is Phase.TERMINATED:
            return
        self.phase = Phase.TERMINATING

        self.write("\nExiting game...")
        if self.game_id:
            self._delete_session(self.game_id)
        else:
            self.write("No active game session to delete.")

        self.phase = Phase.TERMINATED
        logger.info("Game finished: %s after %d attempts", self.outcome, self.attempts)

    def _delete_session(self, game_id: SessionId) -> None:
        """
        Issue exactly one DELETE and wait for it at most delete_wait_seconds.

        The request runs on a daemon thread: if the wait gives up, the call
        may still finish later, its result is ignored, and it cannot keep the
        process alive.
        """
        done = threading.Event()
        result: Dict[str, object] = {}

        def _worker() -> None:
            try:
                self.client.delete(game_id)
                result["deleted"] = True
            except ApiError as error:
                result["error"] = error
            finally:
                done.set()

        threading.Thread(target=_worker, name="mastermind-delete", daemon=True).start()

        if not done.wait(self.delete_wait_seconds):
            logger.warning("Delete of %s timed out after %ss", game_id, self.delete_wait_seconds)
            self.write(
                f"Could not delete game session: no response after {self.delete_wait_seconds:g} seconds."
            )
            return

        if "error" in result:
            logger.warning("Delete of %s failed: %s", game_id, result["error"])
            self.write(f"Could not delete game session: {result['error']}")
        elif result.get("deleted"):
            self.game_id = None
            self.write("Game session successfully deleted.")
        else:
            # The worker died on something that isn't an ApiError; the thread
            # excepthook has already reported it
            self.write("Could not delete game session: unexpected error.")
