import json
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "CYCLES": "femcare_cycles",
    "REMINDERS": "femcare_reminders",
    "HEALTH_LOGS": "femcare_health_logs",
    "QUESTIONS": "femcare_questions",
    "USER_PROFILE": "femcare_user_profile",
}


class Database:
    """JSON collections stored per owner (chat), keyed by collection name."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False, timeout=10)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA busy_timeout=5000")
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        return self._conn

    def _init_db(self):
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS collections (
                    owner_id INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    payload TEXT NOT NULL,
                    updated_at TEXT NOT NULL DEFAULT (datetime('now')),
                    PRIMARY KEY (owner_id, name)
                )
            """)

    def close(self):
        self._conn.close()

    # ── Key-value access ────────────────────────────────────────────

    def get_item(self, owner_id: int, key: str, default=None):
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT payload FROM collections WHERE owner_id = ? AND name = ?",
                (owner_id, key),
            ).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["payload"])
        except json.JSONDecodeError as e:
            logger.error(f"Error reading key {key!r} for {owner_id}: {e}")
            return default

    def set_item(self, owner_id: int, key: str, value) -> bool:
        try:
            with self._get_conn() as conn:
                conn.execute("""
                    INSERT INTO collections (owner_id, name, payload) VALUES (?, ?, ?)
                    ON CONFLICT(owner_id, name) DO UPDATE SET
                        payload = excluded.payload,
                        updated_at = datetime('now')
                """, (owner_id, key, json.dumps(value)))
            return True
        except sqlite3.Error as e:
            logger.error(f"Error saving key {key!r} for {owner_id}: {e}")
            return False

    def remove_item(self, owner_id: int, key: str) -> bool:
        try:
            with self._get_conn() as conn:
                conn.execute(
                    "DELETE FROM collections WHERE owner_id = ? AND name = ?",
                    (owner_id, key),
                )
            return True
        except sqlite3.Error as e:
            logger.error(f"Error removing key {key!r} for {owner_id}: {e}")
            return False

    def clear(self, owner_id: int) -> bool:
        try:
            with self._get_conn() as conn:
                conn.execute("DELETE FROM collections WHERE owner_id = ?", (owner_id,))
            return True
        except sqlite3.Error as e:
            logger.error(f"Error clearing data for {owner_id}: {e}")
            return False

    def repository(self, owner_id: int, key: str, model) -> "Repository":
        return Repository(self, owner_id, key, model)


class Repository:
    """Typed load/save view over one stored collection."""

    def __init__(self, db: Database, owner_id: int, key: str, model):
        self.db = db
        self.owner_id = owner_id
        self.key = key
        self.model = model

    def load(self) -> list:
        records = []
        for item in self.db.get_item(self.owner_id, self.key, []):
            try:
                records.append(self.model.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed {self.key} record for {self.owner_id}: {e}")
        return records

    def save(self, records: list) -> bool:
        return self.db.set_item(self.owner_id, self.key, [r.to_dict() for r in records])
