import os
import tempfile

# Set test environment variables before any source imports
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "test-token")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-api-key")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="femcare-data-"))
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="femcare-logs-"))

from datetime import date

import pytest
from unittest.mock import AsyncMock, MagicMock

from femcare.db import STORAGE_KEYS, Database
from femcare.models import CycleRecord, HealthLog, Question, Reminder


@pytest.fixture
def db(tmp_path):
    """Fresh Database instance using temp file (real SQLite, WAL mode)."""
    database = Database(tmp_path / "test.db")
    yield database
    database.close()


@pytest.fixture
def cycles_repo(db):
    return db.repository(1000, STORAGE_KEYS["CYCLES"], CycleRecord)


@pytest.fixture
def reminders_repo(db):
    return db.repository(1000, STORAGE_KEYS["REMINDERS"], Reminder)


@pytest.fixture
def health_repo(db):
    return db.repository(1000, STORAGE_KEYS["HEALTH_LOGS"], HealthLog)


@pytest.fixture
def questions_repo(db):
    return db.repository(1000, STORAGE_KEYS["QUESTIONS"], Question)


@pytest.fixture
def db_with_cycle(db, cycles_repo):
    """Chat 1000 has one logged cycle starting 2026-02-01 (28 days)."""
    cycles_repo.save([CycleRecord(start_date=date(2026, 2, 1), cycle_length=28, id="c1")])
    return db


@pytest.fixture
def mock_anthropic_response():
    """Factory returning mock Anthropic response with given text."""
    def _factory(text="Test response"):
        response = MagicMock()
        block = MagicMock()
        block.text = text
        response.content = [block]
        return response
    return _factory


@pytest.fixture
def mock_context(db_with_cycle):
    """Mock Telegram context with bot_data['db'] pointing to test DB."""
    context = MagicMock()
    context.bot_data = {"db": db_with_cycle}
    context.args = []
    context.bot = AsyncMock()
    return context


@pytest.fixture
def make_update():
    """Factory creating mock Telegram Update with given chat_id and text."""
    def _factory(chat_id=1000, text="/start"):
        update = MagicMock()
        update.effective_chat.id = chat_id
        update.message = MagicMock()
        update.message.text = text
        update.message.reply_text = AsyncMock()
        update.callback_query = MagicMock()
        update.callback_query.answer = AsyncMock()
        update.callback_query.data = ""
        update.callback_query.message.chat_id = chat_id
        update.callback_query.edit_message_text = AsyncMock()
        return update
    return _factory
