'''
MasterAnd API

Endpoints:
POST   /players               -> create a profile
GET    /players               -> list profiles
GET    /players/{id}          -> read a profile
PUT    /players/{id}          -> edit a profile
DELETE /players/{id}          -> delete a profile and its scores

POST /games                   -> start a game (color_count 4..10, optional player_id)
GET  /games/{id}              -> read state & history
POST /games/{id}/guess        -> submit a guess
GET  /games/{id}/secret       -> reveal the secret of a finished game
POST /games/{id}/result       -> retry saving a won game's score
DELETE /games/{id}            -> abandon / forget a game

GET  /highscores              -> best results, most colors first

Live games are kept in memory (GameStore); players and results go to the
database (DBResultRecorder).
'''

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .bootstrap_db import create_all    # dev-only: create tables
from .config import configure_logging, get_settings
from .db import get_db                  # SQLAlchemy Session dependency
from .engine import count_marks
from .errors import InvalidStateError, ResultNotSavedError, SessionTerminalError
from .palette import palette_for
from .random_client import rng_from_seed
from .repository import DBResultRecorder
from .session import Attempt
from .store import GameEntry, GameStore
from .types import FeedbackMark

from .schemas import (
    AttemptOut,
    GameState,
    GuessRequest,
    GuessResponse,
    HighScoreOut,
    NewGameResponse,
    PlayerIn,
    PlayerOut,
    SecretOut,
)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="MasterAnd API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if settings.app_env == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

game_store = GameStore(rng=rng_from_seed(settings.secret_seed))


def get_game_store() -> GameStore:
    return game_store


# Per-request recorder bound to the current DB session
def get_recorder(session = Depends(get_db)) -> DBResultRecorder:
    return DBResultRecorder(session)


# --- Helpers ---

def _attempt_out(attempt: Attempt) -> AttemptOut:
    counts = count_marks(attempt.feedback)
    return AttemptOut(
        number=attempt.number,
        guess=list(attempt.guess),
        feedback=[mark.value for mark in attempt.feedback],
        correct=counts[FeedbackMark.CORRECT],
        present=counts[FeedbackMark.PRESENT],
    )


def _game_state(entry: GameEntry) -> GameState:
    session = entry.session
    return GameState(
        game_id=entry.id,
        palette=list(session.palette),
        attempts_left=session.attempts_left,
        status=session.status,
        history=[_attempt_out(a) for a in session.attempts()],
        secret=None if session.is_active else list(session.reveal_secret()),
        score=entry.score,
    )


def _require_player(recorder: DBResultRecorder, player_id: int) -> PlayerOut:
    player = recorder.get_player(player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player


# ---------------- Players ----------------

@app.post("/players", response_model=PlayerOut, summary="Create a player profile")
def create_player(payload: PlayerIn, recorder: DBResultRecorder = Depends(get_recorder)) -> PlayerOut:
    return recorder.add_player(payload.name, payload.email, payload.image_uri)


@app.get("/players", response_model=List[PlayerOut], summary="List player profiles")
def list_players(recorder: DBResultRecorder = Depends(get_recorder)) -> List[PlayerOut]:
    return recorder.list_players()


@app.get("/players/{player_id}", response_model=PlayerOut, summary="Get a player profile")
def get_player(player_id: int, recorder: DBResultRecorder = Depends(get_recorder)) -> PlayerOut:
    return _require_player(recorder, player_id)


@app.put("/players/{player_id}", response_model=PlayerOut, summary="Edit a player profile")
def update_player(
    player_id: int,
    payload: PlayerIn,
    recorder: DBResultRecorder = Depends(get_recorder),
) -> PlayerOut:
    updated = recorder.update_player(player_id, payload.name, payload.email, payload.image_uri)
    if not updated:
        raise HTTPException(status_code=404, detail="Player not found")
    return updated


@app.delete("/players/{player_id}", summary="Delete a player and their scores")
def delete_player(
    player_id: int,
    store: GameStore = Depends(get_game_store),
    recorder: DBResultRecorder = Depends(get_recorder),
) -> dict:
    if not recorder.delete_player_with_scores(player_id):
        raise HTTPException(status_code=404, detail="Player not found")
    # Their unfinished games can no longer be saved anywhere
    store.discard_player(player_id)
    return {"message": "Player deleted."}


@app.get("/players/{player_id}/results", response_model=List[HighScoreOut], summary="A player's results")
def player_results(player_id: int, recorder: DBResultRecorder = Depends(get_recorder)) -> List[HighScoreOut]:
    _require_player(recorder, player_id)
    return recorder.player_results(player_id)


# ---------------- Games ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    color_count: int = 4,
    player_id: Optional[int] = None,
    store: GameStore = Depends(get_game_store),
    recorder: DBResultRecorder = Depends(get_recorder),
) -> NewGameResponse:
    """
    color_count picks how many of the standard colors are in play (4..10).
    With a player_id, a won game's score is saved for that player.
    """
    if player_id is not None:
        _require_player(recorder, player_id)

    # Housekeeping: forget finished games nobody has looked at for a while
    store.prune_finished(settings.finished_game_ttl)

    try:
        entry = store.create(palette_for(color_count), player_id=player_id)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

    return NewGameResponse(
        game_id=entry.id,
        palette=list(entry.session.palette),
        attempts_left=entry.session.attempts_left,
        status=entry.session.status,
        player_id=player_id,
    )


@app.get("/games/{game_id}", response_model=GameState, summary="Get current game state")
def get_game(game_id: str, store: GameStore = Depends(get_game_store)) -> GameState:
    entry = store.get(game_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Game not found")
    return _game_state(entry)


@app.delete("/games/{game_id}", summary="Abandon or forget a game")
def delete_game(game_id: str, store: GameStore = Depends(get_game_store)) -> dict:
    if not store.discard(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"message": "Game deleted."}


@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_game_store),
    recorder: DBResultRecorder = Depends(get_recorder),
) -> GuessResponse:
    try:
        entry = store.guess(game_id, payload.guess, recorder=recorder)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except SessionTerminalError as err:
        raise HTTPException(status_code=409, detail=str(err))
    except ResultNotSavedError as err:
        # The game is won; POST /games/{id}/result retries the save
        raise HTTPException(status_code=503, detail=str(err))
    if not entry:
        raise HTTPException(status_code=404, detail="Game not found")

    session = entry.session
    latest = session.attempts()[-1]

    # When the game ends, include the secret in the response
    secret = None if session.is_active else list(session.reveal_secret())

    return GuessResponse(
        attempts_left=session.attempts_left,
        status=session.status,
        feedback=_attempt_out(latest),
        secret=secret,
        score=entry.score,
        note=(f"Game {session.status}. No more guesses allowed."
              if not session.is_active else None),
    )


@app.post("/games/{game_id}/result", response_model=GameState, summary="Retry saving a won game's score")
def save_result(
    game_id: str,
    store: GameStore = Depends(get_game_store),
    recorder: DBResultRecorder = Depends(get_recorder),
) -> GameState:
    try:
        entry = store.save_result(game_id, recorder=recorder)
    except InvalidStateError as err:
        raise HTTPException(status_code=409, detail=str(err))
    except ResultNotSavedError as err:
        raise HTTPException(status_code=503, detail=str(err))
    if not entry:
        raise HTTPException(status_code=404, detail="Game not found")
    return _game_state(entry)


@app.get("/games/{game_id}/secret", response_model=SecretOut, summary="Reveal the secret of a finished game")
def reveal_secret(game_id: str, store: GameStore = Depends(get_game_store)) -> SecretOut:
    entry = store.get(game_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Game not found")
    try:
        secret = entry.session.reveal_secret()
    except SessionTerminalError as err:
        raise HTTPException(status_code=409, detail=str(err))
    return SecretOut(secret=list(secret), status=entry.session.status)


# ---------------- High scores ----------------

@app.get("/highscores", response_model=List[HighScoreOut], summary="Get high scores")
def get_high_scores(
    limit: Optional[int] = None,
    recorder: DBResultRecorder = Depends(get_recorder),
) -> List[HighScoreOut]:
    return recorder.high_scores(limit)
