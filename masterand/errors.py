"""
Engine errors.

Input problems (bad palette, bad guess) are ValueErrors so the HTTP layer
can turn them into 400s. Misuse of a finished or unfinished session is a
RuntimeError.
"""


class MasterAndError(Exception):
    """Base class for every error raised by the game engine."""


class InvalidPaletteError(MasterAndError, ValueError):
    """Palette has fewer than 4 or more than 10 colors, or repeats a color."""


class InvalidGuessError(MasterAndError, ValueError):
    """Guess has the wrong length, repeats a color, or uses an unknown color."""


class SessionTerminalError(MasterAndError, RuntimeError):
    """Operation not allowed in the session's current state."""


class InvalidStateError(MasterAndError, RuntimeError):
    """Scoring was requested for a session that has not been won."""


class ResultNotSavedError(MasterAndError, RuntimeError):
    """A won game's result could not be handed to the result store; it can be retried."""
