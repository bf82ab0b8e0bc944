"""
Pydantic models for the three payload shapes exchanged with the server,
plus the error body every failing endpoint may return.

POST /game          -> CreateGameResponse | ErrorResponse
POST /guess         <- GuessRequest
                    -> GuessResponse | ErrorResponse
DELETE /game/{id}   -> (no body) | ErrorResponse
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from .engine import CODE_LENGTH, MAX_DIGIT, MIN_DIGIT, is_valid_guess, is_win


# 1. Response when a new game session is created
class CreateGameResponse(BaseModel):
    game_id: str = Field(..., min_length=1, description="Opaque ID of the new game session")


# 2. Body sent for every guess
class GuessRequest(BaseModel):
    game_id: str = Field(..., min_length=1, description="Session the guess belongs to")
    guess: str = Field(..., description="Exactly 4 digits, each between 1 and 6")

    @field_validator("guess")
    @classmethod
    def validate_guess(cls, guess: str) -> str:
        if not is_valid_guess(guess):
            raise ValueError(
                f"Guess must be exactly {CODE_LENGTH} digits, each between {MIN_DIGIT} and {MAX_DIGIT}."
            )
        return guess

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"game_id": "2f1c9a", "guess": "1122"},
            ]
        }
    }


# 3. Feedback for one guess
class GuessResponse(BaseModel):
    black: int = Field(..., ge=0, le=CODE_LENGTH, description="Right digit in the right place")
    white: int = Field(..., ge=0, le=CODE_LENGTH, description="Right digit in the wrong place")

    @model_validator(mode="after")
    def check_total(self) -> "GuessResponse":
        # A peg is either black or white, never both
        if self.black + self.white > CODE_LENGTH:
            raise ValueError(
                f"black + white must not exceed {CODE_LENGTH} (got {self.black} + {self.white})."
            )
        return self

    @property
    def is_win(self) -> bool:
        return is_win(self.black)


# 4. Error body returned with non-success statuses
class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable reason from the server")
