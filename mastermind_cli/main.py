"""
Terminal entry point: `mastermind` (or `python -m mastermind_cli.main`).

No flags. Settings come from the environment / .env (see config.py).

Exit status:
  0 -> code cracked, or the player quit
  1 -> the game could not start, or the server lost the session
"""

import sys

from .api_client import SessionClient
from .config import load_settings
from .controller import GameController, exit_code_for
from .logging_setup import configure_logging


def play() -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    client = SessionClient(settings.base_url, timeout=settings.request_timeout)
    controller = GameController(client, delete_wait_seconds=settings.delete_wait_seconds)
    try:
        outcome = controller.run()
    finally:
        client.close()
    return exit_code_for(outcome)


def main() -> None:
    sys.exit(play())


if __name__ == "__main__":
    main()
