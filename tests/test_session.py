"""
Testing the game session state machine.
"""

import random

import pytest

from masterand import api
from masterand.errors import InvalidGuessError, InvalidPaletteError, SessionTerminalError
from masterand.engine import count_marks
from masterand.random_client import generate
from masterand.session import Attempt, GameSession
from masterand.types import FeedbackMark

from conftest import PALETTE_6

SECRET = ("red", "green", "blue", "yellow")
MISS = ("magenta", "cyan", "red", "green")  # never a win against SECRET


@pytest.fixture
def session() -> GameSession:
    # Fixed secret so outcomes are known
    return GameSession(palette=PALETTE_6, secret=SECRET)


def test_new_session_starts_active(rng):
    session = GameSession.new(PALETTE_6, rng)
    assert session.status == "active"
    assert session.attempts() == ()
    assert session.attempts_left == 10
    assert session.palette == PALETTE_6


def test_new_session_secret_matches_seeded_generator():
    expected = generate(PALETTE_6, random.Random(42))
    session = GameSession.new(PALETTE_6, random.Random(42))
    _, status = session.submit_guess(expected)
    assert status == "won"
    assert session.reveal_secret() == expected


def test_new_session_rejects_bad_palette():
    with pytest.raises(InvalidPaletteError):
        GameSession.new(["red", "green", "blue"])


def test_winning_guess(session):
    feedback, status = session.submit_guess(list(SECRET))
    assert feedback == (FeedbackMark.CORRECT,) * 4
    assert status == "won"
    assert session.reveal_secret() == SECRET


def test_non_winning_guess_stays_active(session):
    feedback, status = session.submit_guess(["red", "blue", "green", "yellow"])
    assert status == "active"
    assert count_marks(feedback) == {
        FeedbackMark.CORRECT: 2,
        FeedbackMark.PRESENT: 2,
        FeedbackMark.ABSENT: 0,
    }
    assert session.attempts_left == 9


def test_attempts_are_numbered_in_order(session):
    session.submit_guess(MISS)
    session.submit_guess(["yellow", "blue", "green", "red"])
    log = session.attempts()
    assert [a.number for a in log] == [1, 2]
    assert log[0] == Attempt(number=1, guess=MISS, feedback=log[0].feedback)
    assert log[1].guess == ("yellow", "blue", "green", "red")


def test_attempts_view_is_a_snapshot(session):
    session.submit_guess(MISS)
    snapshot = session.attempts()
    session.submit_guess(MISS[::-1])
    assert len(snapshot) == 1
    assert len(session.attempts()) == 2


def test_every_feedback_has_four_marks(session):
    guesses = [MISS, ("cyan", "magenta", "blue", "red"), ("yellow", "green", "blue", "red")]
    for guess in guesses:
        feedback, _ = session.submit_guess(guess)
        assert sum(count_marks(feedback).values()) == 4


def test_ten_misses_lose_and_eleventh_fails(session):
    for i in range(9):
        _, status = session.submit_guess(MISS)
        assert status == "active"

    _, status = session.submit_guess(MISS)
    assert status == "lost"
    assert len(session.attempts()) == 10
    assert session.reveal_secret() == SECRET

    with pytest.raises(SessionTerminalError):
        session.submit_guess(SECRET)
    assert len(session.attempts()) == 10


def test_win_on_last_attempt(session):
    for _ in range(9):
        session.submit_guess(MISS)
    _, status = session.submit_guess(SECRET)
    assert status == "won"


def test_no_guess_after_win(session):
    session.submit_guess(SECRET)
    with pytest.raises(SessionTerminalError):
        session.submit_guess(MISS)
    assert session.status == "won"
    assert len(session.attempts()) == 1


@pytest.mark.parametrize("guess", [
    ["red", "green", "blue"],
    ["red", "green", "blue", "yellow", "cyan"],
    ["red", "red", "blue", "yellow"],
    ["red", "green", "blue", "orange"],
])
def test_invalid_guess_is_not_recorded(session, guess):
    with pytest.raises(InvalidGuessError):
        session.submit_guess(guess)
    assert session.attempts() == ()
    assert session.status == "active"


def test_reveal_while_active_fails(session):
    with pytest.raises(SessionTerminalError):
        session.reveal_secret()
    session.submit_guess(MISS)
    with pytest.raises(SessionTerminalError):
        session.reveal_secret()


def test_function_api_round(rng):
    session = api.new_session(PALETTE_6, rng)
    feedback, status = api.submit_guess(session, PALETTE_6[:4])
    assert len(feedback) == 4
    assert api.attempts(session)[0].guess == PALETTE_6[:4]
    if status == "active":
        with pytest.raises(SessionTerminalError):
            api.reveal_secret(session)


def test_unhashable_guess_is_rejected_not_crashing(session):
    with pytest.raises(InvalidGuessError):
        session.submit_guess(["red", {"green": 1}, "blue", "yellow"])
    assert session.attempts() == ()
    assert session.status == "active"


@pytest.mark.parametrize("secret", [
    ("red", "green", "blue"),
    ("red", "red", "blue", "yellow"),
    ("red", "green", "blue", "orange"),
])
def test_constructor_rejects_bad_secret(secret):
    with pytest.raises(ValueError, match="Invalid secret"):
        GameSession(palette=PALETTE_6, secret=secret)


def test_constructor_rejects_bad_palette():
    with pytest.raises(InvalidPaletteError):
        GameSession(palette=("red", "green", "blue"), secret=("red", "green", "blue", "yellow"))
