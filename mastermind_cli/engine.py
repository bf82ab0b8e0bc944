"""
Pure game rules (no HTTP, no terminal I/O).

The server keeps the secret and does all the scoring. The only rules the
client needs locally are:
- what a well-formed guess looks like (4 characters, each digit 1..6)
- which word ends the game early ("exit", any case)
- when feedback means the code was cracked (4 black pegs)
"""

CODE_LENGTH = 4
MIN_DIGIT = 1
MAX_DIGIT = 6
EXIT_COMMAND = "exit"

ALLOWED_DIGITS = frozenset(str(d) for d in range(MIN_DIGIT, MAX_DIGIT + 1))


def normalize_input(raw: str) -> str:
    return raw.strip()


def is_exit_command(text: str) -> bool:
    return normalize_input(text).lower() == EXIT_COMMAND


def is_valid_guess(text: str) -> bool:
    """
    Example:
      "1234" -> True
      "1237" -> False (7 is out of range)
      "12a4" -> False (not a digit)
      "123"  -> False (too short)
    No partial parsing: one bad character rejects the whole guess.
    """
    if len(text) != CODE_LENGTH:
        return False

    # Membership check instead of str.isdigit(), which also accepts
    # non-ASCII digits like "١"
    for char in text:
        if char not in ALLOWED_DIGITS:
            return False
    return True


def is_win(black: int) -> bool:
    return black == CODE_LENGTH


def format_feedback(black: int, white: int) -> str:
    return f"{black}B {white}W"
