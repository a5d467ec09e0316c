"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

import re
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

Status = Literal["active", "won", "lost"]
Mark = Literal["correct", "present", "absent"]


# Same rule the profile screen uses
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_+&*-]+(?:\.[a-zA-Z0-9_+&*-]+)*@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,7}$")


# 1. Player profiles
class PlayerIn(BaseModel):
    name: str = Field(..., min_length=3, max_length=100, description="Display name (at least 3 characters)")
    email: str = Field(..., max_length=255, description="Contact email")
    image_uri: Optional[str] = Field(None, max_length=1024, description="Avatar location, if any")

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        name = name.strip()
        if len(name) < 3:
            raise ValueError("Name must be at least 3 characters.")
        return name

    @field_validator("email")
    @classmethod
    def validate_email(cls, email: str) -> str:
        email = email.strip()
        if not EMAIL_PATTERN.match(email):
            raise ValueError("Invalid email format.")
        return email

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Ada", "email": "ada@example.com", "image_uri": None},
            ]
        }
    }


class PlayerOut(BaseModel):
    id: int = Field(..., description="Player ID")
    name: str
    email: str
    image_uri: Optional[str] = None


# 2. Starting a game
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    palette: List[str] = Field(..., description="Colors that may be used in guesses")
    attempts_left: int = Field(..., description="How many guesses remain")
    status: Status = Field(..., description="Current state of the game")
    player_id: Optional[int] = Field(None, description="Player the result will be saved for")


# 3. Validates player's guess
class GuessRequest(BaseModel):
    guess: List[str] = Field(
        ..., description="Exactly 4 distinct colors from the game's palette."
    )

    @field_validator("guess")
    @classmethod
    def validate_colors(cls, guess_list: List[str]) -> List[str]:
        """
        We only normalise spelling here. Length, repeats and palette
        membership are checked by the game session itself.
        """
        return [color.strip().lower() for color in guess_list]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"guess": ["red", "green", "blue", "yellow"]},
            ]
        }
    }


# 4. Feedback for a single guess
class AttemptOut(BaseModel):
    number: int = Field(..., description="1-based attempt number")
    guess: List[str] = Field(..., description="The player's guess")
    feedback: List[Mark] = Field(..., description="Marks grouped correct, present, absent (not by position)")
    correct: int = Field(..., description="Right color, right place")
    present: int = Field(..., description="Right color, wrong place")


# 5. Overall state of the game
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    palette: List[str] = Field(..., description="Colors available in this game")
    attempts_left: int = Field(..., description="How many guesses remain")
    status: Status = Field(..., description="Current state of the game")
    history: List[AttemptOut] = Field(..., description="All guesses made so far with feedback")
    secret: Optional[List[str]] = Field(None, description="Only present once the game is over")
    score: Optional[int] = Field(None, description="Only present for won games")


# 6. Result of a guess
class GuessResponse(BaseModel):
    attempts_left: int = Field(..., description="How many guesses remain")
    status: Status = Field(..., description="Current state of the game")
    feedback: AttemptOut = Field(..., description="Feedback from this guess")
    secret: Optional[List[str]] = Field(None, description="The secret (only revealed if game is over)")
    score: Optional[int] = Field(None, description="Score, if this guess won the game")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Game lost. No more guesses allowed.')")


# 7. Reveal
class SecretOut(BaseModel):
    secret: List[str]
    status: Status


# 8. High score table row
class HighScoreOut(BaseModel):
    player_id: int
    player_name: str
    color_count: int = Field(..., description="Colors in play for that game")
    score: int = Field(..., description="10 minus guesses used")
