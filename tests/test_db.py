import sqlite3
from datetime import date
from unittest.mock import patch

from femcare.db import STORAGE_KEYS, Database, Repository
from femcare.models import CycleRecord


# -- Schema --

class TestSchema:
    def test_collections_table_exists(self, db):
        tables = db._get_conn().execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
        assert "collections" in {r["name"] for r in tables}

    def test_wal_mode(self, db):
        result = db._get_conn().execute("PRAGMA journal_mode").fetchone()
        assert result[0] == "wal"

    def test_reopen_keeps_data(self, tmp_path):
        first = Database(tmp_path / "persist.db")
        first.set_item(1, "femcare_cycles", [{"a": 1}])
        first.close()
        second = Database(tmp_path / "persist.db")
        assert second.get_item(1, "femcare_cycles") == [{"a": 1}]
        second.close()


# -- Key-value access --

class TestItems:
    def test_missing_returns_default(self, db):
        assert db.get_item(1, "femcare_cycles", []) == []

    def test_missing_without_default_is_none(self, db):
        assert db.get_item(1, "femcare_cycles") is None

    def test_set_then_get(self, db):
        assert db.set_item(1, "femcare_reminders", [{"id": "x"}]) is True
        assert db.get_item(1, "femcare_reminders") == [{"id": "x"}]

    def test_set_overwrites(self, db):
        db.set_item(1, "k", [1])
        db.set_item(1, "k", [2, 3])
        assert db.get_item(1, "k") == [2, 3]

    def test_owners_are_isolated(self, db):
        db.set_item(1, "k", ["mine"])
        db.set_item(2, "k", ["theirs"])
        assert db.get_item(1, "k") == ["mine"]
        assert db.get_item(2, "k") == ["theirs"]

    def test_corrupt_payload_returns_default(self, db):
        with db._get_conn() as conn:
            conn.execute(
                "INSERT INTO collections (owner_id, name, payload) VALUES (?, ?, ?)",
                (1, "k", "{not json"),
            )
        assert db.get_item(1, "k", []) == []

    def test_remove_item(self, db):
        db.set_item(1, "k", [1])
        assert db.remove_item(1, "k") is True
        assert db.get_item(1, "k") is None

    def test_clear_only_affects_owner(self, db):
        db.set_item(1, "a", [1])
        db.set_item(1, "b", [2])
        db.set_item(2, "a", [3])
        assert db.clear(1) is True
        assert db.get_item(1, "a") is None
        assert db.get_item(1, "b") is None
        assert db.get_item(2, "a") == [3]

    def test_set_item_failure_returns_false(self, db):
        with patch.object(db, "_get_conn", side_effect=sqlite3.OperationalError("disk full")):
            assert db.set_item(1, "k", [1]) is False


# -- Repository --

class TestRepository:
    def test_factory(self, db):
        repo = db.repository(7, STORAGE_KEYS["CYCLES"], CycleRecord)
        assert isinstance(repo, Repository)
        assert repo.owner_id == 7
        assert repo.key == "femcare_cycles"

    def test_load_empty(self, cycles_repo):
        assert cycles_repo.load() == []

    def test_save_and_load(self, cycles_repo):
        record = CycleRecord(start_date=date(2024, 1, 1), cycle_length=30, id="abc")
        assert cycles_repo.save([record]) is True
        loaded = cycles_repo.load()
        assert len(loaded) == 1
        assert loaded[0].id == "abc"
        assert loaded[0].start_date == date(2024, 1, 1)
        assert loaded[0].cycle_length == 30

    def test_stored_as_camel_case_json(self, db, cycles_repo):
        cycles_repo.save([CycleRecord(start_date=date(2024, 1, 1), id="abc")])
        raw = db.get_item(1000, "femcare_cycles")
        assert raw[0]["startDate"] == "2024-01-01"
        assert raw[0]["cycleLength"] == 28

    def test_malformed_records_are_skipped(self, db, cycles_repo):
        good = CycleRecord(start_date=date(2024, 1, 1), id="ok").to_dict()
        db.set_item(1000, "femcare_cycles", [good, {"id": "broken"}])
        loaded = cycles_repo.load()
        assert [c.id for c in loaded] == ["ok"]
