# tests/test_repository.py
import pytest

from masterand import random_client
from masterand.repository import DBResultRecorder
from masterand.store import GameStore

SECRET = ("red", "green", "blue", "yellow")


def test_player_crud(db_session):
    repo = DBResultRecorder(db_session)

    ada = repo.add_player("Ada", "ada@example.com")
    assert ada.id is not None
    assert repo.get_player(ada.id).name == "Ada"

    updated = repo.update_player(ada.id, "Ada L.", "ada@example.org", "file:///ada.png")
    assert updated.name == "Ada L."
    assert updated.image_uri == "file:///ada.png"

    assert [p.id for p in repo.list_players()] == [ada.id]
    assert repo.update_player(9999, "x", "x@y") is None
    assert repo.get_player(9999) is None


def test_high_scores_order(db_session):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")
    bob = repo.add_player("Bob", "bob@example.com")

    repo.record_result(ada.id, color_count=4, score=9)
    repo.record_result(bob.id, color_count=6, score=2)
    repo.record_result(bob.id, color_count=4, score=5)
    repo.record_result(ada.id, color_count=6, score=7)

    table = [(h.player_name, h.color_count, h.score) for h in repo.high_scores()]
    assert table == [
        ("Ada", 6, 7),
        ("Bob", 6, 2),
        ("Ada", 4, 9),
        ("Bob", 4, 5),
    ]
    assert len(repo.high_scores(limit=2)) == 2
    assert [h.score for h in repo.player_results(bob.id)] == [2, 5]


def test_delete_player_removes_scores(db_session):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")
    bob = repo.add_player("Bob", "bob@example.com")
    repo.record_result(ada.id, 4, 9)
    repo.record_result(bob.id, 4, 3)

    assert repo.delete_player_with_scores(ada.id) is True
    assert repo.get_player(ada.id) is None
    assert [h.player_name for h in repo.high_scores()] == ["Bob"]
    assert repo.delete_player_with_scores(ada.id) is False


def test_store_records_win_to_db(db_session, monkeypatch):
    monkeypatch.setattr(random_client, "generate", lambda palette, rng=None: SECRET)

    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")

    store = GameStore(recorder=repo)
    game = store.create(("red", "green", "blue", "yellow", "cyan"), player_id=ada.id)
    store.guess(game.id, ("yellow", "green", "blue", "red"))
    store.guess(game.id, SECRET)

    results = repo.player_results(ada.id)
    assert [(r.color_count, r.score) for r in results] == [(5, 8)]


def test_clear_all(db_session):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")
    repo.record_result(ada.id, 4, 1)
    repo.clear_all()
    assert repo.list_players() == []
    assert repo.high_scores() == []


def test_deleted_player_id_is_not_reused(db_session):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")
    repo.delete_player_with_scores(ada.id)

    bob = repo.add_player("Bob", "bob@example.com")
    assert bob.id != ada.id


def test_result_for_missing_player_is_skipped(db_session):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")
    repo.delete_player_with_scores(ada.id)

    repo.record_result(ada.id, 4, 9)
    assert repo.high_scores() == []


def test_failed_commit_is_rolled_back(db_session, monkeypatch):
    repo = DBResultRecorder(db_session)
    ada = repo.add_player("Ada", "ada@example.com")

    def broken_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db_session, "commit", broken_commit)
    with pytest.raises(RuntimeError):
        repo.record_result(ada.id, 4, 9)
    monkeypatch.undo()

    # The session is usable again and the failed row is gone
    assert repo.player_results(ada.id) == []
    repo.record_result(ada.id, 4, 7)
    assert [r.score for r in repo.player_results(ada.id)] == [7]
