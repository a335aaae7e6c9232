"""
ProgressStore tests against a temporary SQLite file.
"""

import json
import random

import pytest

from hizbtracker.reader import ProgressStore


class TestProgressStore:

    def test_fresh_store_is_all_false(self, store):
        assert store.load() == [False] * 60

    def test_creates_parent_directory(self, tmp_path):
        store = ProgressStore(tmp_path / "nested" / "dir" / "progress.db")
        assert store.db_path.parent.exists()
        assert store.load() == [False] * 60

    def test_round_trip(self, store):
        done = [i % 3 == 0 for i in range(60)]
        store.save(done)
        assert store.load() == done

    def test_round_trip_random(self, store):
        rng = random.Random(42)
        for _ in range(5):
            done = [rng.random() < 0.5 for _ in range(60)]
            store.save(done)
            assert store.load() == done

    def test_round_trip_survives_new_instance(self, store):
        done = [True] * 60
        store.save(done)
        assert ProgressStore(store.db_path).load() == done

    def test_stored_format(self, store):
        store.save([True] + [False] * 59)
        assert json.loads(store.read_raw()) == {"done": [True] + [False] * 59}

    def test_corrupted_snapshot(self, store):
        store.write_raw("{not json")
        assert store.load() == [False] * 60

    def test_wrong_length_snapshot(self, store):
        store.write_raw(json.dumps({"done": [True] * 59}))
        assert store.load() == [False] * 60

    def test_wrong_type_snapshot(self, store):
        store.write_raw(json.dumps([True] * 60))
        assert store.load() == [False] * 60

    def test_save_rejects_wrong_length(self, store):
        with pytest.raises(ValueError):
            store.save([True] * 10)

    def test_reset(self, store):
        store.save([True] * 60)
        store.reset()
        assert store.read_raw() is None
        assert store.load() == [False] * 60

    def test_separate_keys(self, tmp_path):
        a = ProgressStore(tmp_path / "p.db", key="hizb_done_v1")
        b = ProgressStore(tmp_path / "p.db", key="hizb_done_v2")
        a.save([True] * 60)
        assert b.load() == [False] * 60


class TestUnusableDatabase:
    """A progress.db that is not SQLite must not break the store."""

    @pytest.fixture
    def junk_db(self, tmp_path):
        path = tmp_path / "progress.db"
        path.write_bytes(b"this is not an sqlite file at all" * 10)
        return path

    def test_construct_and_load(self, junk_db):
        store = ProgressStore(junk_db)
        assert store.load() == [False] * 60

    def test_save_reports_failure(self, junk_db):
        store = ProgressStore(junk_db)
        assert store.save([True] * 60) is False

    def test_reset_does_not_raise(self, junk_db):
        ProgressStore(junk_db).reset()

    def test_save_succeeds_on_healthy_store(self, store):
        assert store.save([True] * 60) is True
