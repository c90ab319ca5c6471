import json
import logging
import re

import pytest

from game.raiders.scoreboard import PersistenceError, ScoreRepository, upsert_leaderboard


def record(score, start, end="23:59:59"):
    return {"score": score, "startTime": start, "endTime": end}


@pytest.fixture
def repository(tmp_path):
    return ScoreRepository(tmp_path / "score" / "Scoreboard.json",
                           tmp_path / "score" / "Leaderboard.json", capacity=3)


def test_save_score_writes_current_session(repository):
    repository.save_score(record(42.0, "10:00:00", "10:01:00"))
    with repository.scoreboard_path.open() as f:
        assert json.load(f) == record(42.0, "10:00:00", "10:01:00")


def test_leaderboard_starts_empty_and_fills_up(repository):
    assert repository.load_leaderboard() == []
    for i, start in enumerate(["10:00:00", "11:00:00", "12:00:00"]):
        assert repository.save_leaderboard(record(float(i), start))
    assert len(repository.load_leaderboard()) == 3


def test_same_start_time_is_upserted_not_duplicated(repository):
    repository.save_leaderboard(record(5.0, "10:00:00", "10:00:01"))
    repository.save_leaderboard(record(15.0, "10:00:00", "10:00:09"))
    assert repository.load_leaderboard() == [record(15.0, "10:00:00", "10:00:09")]
    # saving the identical record again changes nothing
    assert not repository.save_leaderboard(record(15.0, "10:00:00", "10:00:09"))


def test_full_leaderboard_replaces_lowest_when_beaten(repository):
    for score, start in [(30.0, "08:00:00"), (10.0, "09:00:00"), (20.0, "10:00:00")]:
        repository.save_leaderboard(record(score, start))

    assert repository.save_leaderboard(record(25.0, "11:00:00"))
    scores = sorted(entry["score"] for entry in repository.load_leaderboard())
    assert scores == [20.0, 25.0, 30.0]

    assert not repository.save_leaderboard(record(5.0, "12:00:00"))
    assert len(repository.load_leaderboard()) == 3


def test_upsert_replaces_first_of_tied_lowest_entries():
    entries = [record(1.0, "a"), record(1.0, "b"), record(9.0, "c")]
    assert upsert_leaderboard(entries, record(2.0, "d"), capacity=3)
    assert [e["startTime"] for e in entries] == ["d", "b", "c"]


def test_upsert_equal_score_does_not_replace():
    entries = [record(4.0, "a")]
    assert not upsert_leaderboard(entries, record(4.0, "b"), capacity=1)
    assert entries == [record(4.0, "a")]


def test_corrupt_leaderboard_raises_persistence_error(repository):
    repository.leaderboard_path.parent.mkdir(parents=True)
    repository.leaderboard_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        repository.save_leaderboard(record(1.0, "10:00:00"))


def test_leaderboard_must_be_an_array(repository):
    repository.leaderboard_path.parent.mkdir(parents=True)
    repository.leaderboard_path.write_text('{"score": 1}', encoding="utf-8")
    with pytest.raises(PersistenceError):
        repository.load_leaderboard()


def test_unwritable_location_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    repo = ScoreRepository(blocker / "Scoreboard.json", blocker / "Leaderboard.json")
    with pytest.raises(PersistenceError):
        repo.save_score(record(1.0, "10:00:00"))


def test_engine_writes_scoreboard_with_clock_times(make_engine, repository):
    engine = make_engine(repository=repository)
    engine.execute(2)

    with repository.scoreboard_path.open() as f:
        saved = json.load(f)
    assert re.fullmatch(r"\d\d:\d\d:\d\d", saved["startTime"])
    assert saved["endTime"] >= saved["startTime"]
    assert repository.load_leaderboard() == [saved]


@pytest.mark.parametrize(
    "contents",
    [
        [1, 2, 3],
        [record(3.0, "08:00:00"), {"score": "high", "startTime": "09:00:00"}, record(1.0, "10:00:00")],
        [{"score": 2.0}],
        [{"score": True, "startTime": "08:00:00"}],
    ],
)
def test_malformed_entries_raise_persistence_error(repository, contents):
    repository.leaderboard_path.parent.mkdir(parents=True)
    repository.leaderboard_path.write_text(json.dumps(contents), encoding="utf-8")
    with pytest.raises(PersistenceError):
        repository.save_leaderboard(record(50.0, "11:00:00"))


@pytest.mark.parametrize("contents", [[1, 2, 3], [{"score": "high", "startTime": "09:00:00"}]])
def test_engine_keeps_ticking_with_malformed_leaderboard(make_engine, repository, caplog, contents):
    repository.leaderboard_path.parent.mkdir(parents=True)
    repository.leaderboard_path.write_text(json.dumps(contents), encoding="utf-8")
    engine = make_engine(repository=repository)

    with caplog.at_level(logging.WARNING, logger="game.raiders.engine"):
        assert engine.execute(2) == 2

    assert engine.tick_count == 2
    assert "Could not update leaderboard" in caplog.text
    assert "malformed" in caplog.text
    # the scoreboard is still written every tick
    assert repository.scoreboard_path.exists()


def test_failed_write_leaves_no_temp_file(repository):
    with pytest.raises(PersistenceError):
        repository.save_score({"score": object(), "startTime": "10:00:00", "endTime": "10:00:00"})
    tmp_path = repository.scoreboard_path.with_name(repository.scoreboard_path.name + ".tmp")
    assert not tmp_path.exists()
    assert not repository.scoreboard_path.exists()
