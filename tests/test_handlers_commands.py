from datetime import date
from unittest.mock import AsyncMock, patch

from config.settings import VERSION
from femcare.handlers import (
    start_command,
    predict_command,
    cycle_command,
    cycles_command,
    deletecycle_command,
    remind_command,
    reminders_command,
    toggle_command,
    taken_command,
    health_command,
    ask_command,
    answer_command,
    questions_command,
    learn_command,
    tip_command,
    about_command,
    button_handler,
    get_repo,
    _ai_call_timestamps,
)
from femcare.records import StorageError


def _reply(update) -> str:
    return update.message.reply_text.call_args[0][0]


# ── /start ───────────────────────────────────────────────────────

class TestStartCommand:
    async def test_with_cycle_shows_dashboard(self, make_update, mock_context):
        update = make_update(chat_id=1000)
        await start_command(update, mock_context)
        reply = _reply(update)
        assert "FemCare" in reply
        assert "Cycle day" in reply

    async def test_without_cycle_prompts_logging(self, make_update, mock_context):
        update = make_update(chat_id=3000)
        await start_command(update, mock_context)
        assert "/cycle" in _reply(update)


# ── /cycle ───────────────────────────────────────────────────────

class TestCycleCommand:
    async def test_no_args(self, make_update, mock_context):
        update = make_update()
        await cycle_command(update, mock_context)
        assert "Usage" in _reply(update)

    async def test_invalid_date(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["not-a-date"]
        await cycle_command(update, mock_context)
        assert "format" in _reply(update).lower()

    async def test_invalid_length(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2026-02-01", "abc"]
        await cycle_command(update, mock_context)
        assert "numbers" in _reply(update).lower()

    async def test_out_of_range(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2026-02-01", "10"]
        await cycle_command(update, mock_context)
        assert "between" in _reply(update).lower()

    async def test_future_date(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2099-01-01"]
        await cycle_command(update, mock_context)
        assert "future" in _reply(update).lower()

    async def test_end_before_start(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-02-10", "28", "5", "2025-02-01"]
        await cycle_command(update, mock_context)
        assert "before" in _reply(update).lower()

    async def test_success_appends_cycle(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-03-01", "30", "4"]
        await cycle_command(update, mock_context)
        assert "Cycle saved" in _reply(update)
        cycles = get_repo(mock_context, 1000, "cycles").load()
        assert cycles[-1].start_date == date(2025, 3, 1)
        assert cycles[-1].cycle_length == 30
        assert cycles[-1].period_length == 4

    async def test_storage_failure(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-03-01"]
        with patch("femcare.handlers.records.add_cycle", side_effect=StorageError("boom")):
            await cycle_command(update, mock_context)
        assert "Failed to save" in _reply(update)


class TestCycleListing:
    async def test_cycles_lists_ids(self, make_update, mock_context):
        update = make_update()
        await cycles_command(update, mock_context)
        assert "`c1`" in _reply(update)

    async def test_delete_cycle(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["c1"]
        await deletecycle_command(update, mock_context)
        assert "Deleted" in _reply(update)
        assert get_repo(mock_context, 1000, "cycles").load() == []

    async def test_delete_unknown(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["zzz"]
        await deletecycle_command(update, mock_context)
        assert "No cycle" in _reply(update)

    async def test_predict_without_cycles(self, make_update, mock_context):
        update = make_update(chat_id=3000)
        await predict_command(update, mock_context)
        assert "No cycles" in _reply(update)


# ── Reminders ────────────────────────────────────────────────────

class TestReminderCommands:
    async def test_remind_usage(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["pill"]
        await remind_command(update, mock_context)
        assert "Usage" in _reply(update)

    async def test_remind_invalid_type(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["patch", "daily", "08:00", "Patch"]
        await remind_command(update, mock_context)
        assert "Couldn't create" in _reply(update)

    async def test_remind_toggle_and_taken(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["Pill", "DAILY", "08:00", "Morning", "pill"]
        await remind_command(update, mock_context)
        assert "Reminder created" in _reply(update)

        repo = get_repo(mock_context, 1000, "reminders")
        reminder = repo.load()[0]
        assert reminder.title == "Morning pill"
        assert reminder.type == "pill"

        mock_context.args = [reminder.id]
        await toggle_command(update, mock_context)
        assert "off" in _reply(update)
        assert repo.load()[0].is_active is False

        await taken_command(update, mock_context)
        assert "taken" in _reply(update)
        assert repo.load()[0].last_taken is not None

    async def test_reminders_list_empty(self, make_update, mock_context):
        update = make_update()
        await reminders_command(update, mock_context)
        assert "No reminders" in _reply(update)

    async def test_toggle_unknown(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["nope"]
        await toggle_command(update, mock_context)
        assert "No reminder" in _reply(update)


# ── /health ──────────────────────────────────────────────────────

class TestHealthCommand:
    async def test_usage(self, make_update, mock_context):
        update = make_update()
        await health_command(update, mock_context)
        assert "Usage" in _reply(update)

    async def test_full_entry(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-02-03", "okay", "61.5", "cramps,", "fatigue;", "slept", "badly"]
        await health_command(update, mock_context)
        assert "saved" in _reply(update)
        log = get_repo(mock_context, 1000, "health").load()[0]
        assert log.date == date(2025, 2, 3)
        assert log.mood == "okay"
        assert log.weight == 61.5
        assert log.symptoms == ["Cramps", "Fatigue"]
        assert log.notes == "slept badly"

    async def test_second_entry_same_day_updates(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-02-03", "good"]
        await health_command(update, mock_context)
        mock_context.args = ["2025-02-03", "bad"]
        await health_command(update, mock_context)
        assert "updated" in _reply(update)
        assert len(get_repo(mock_context, 1000, "health").load()) == 1

    async def test_invalid_mood(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["meh"]
        await health_command(update, mock_context)
        assert "Mood must be one of" in _reply(update)

    async def test_nan_weight_rejected(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2025-02-03", "okay", "nan"]
        await health_command(update, mock_context)
        assert "positive number" in _reply(update)
        assert get_repo(mock_context, 1000, "health").load() == []

    async def test_future_date(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["2099-01-01", "good"]
        await health_command(update, mock_context)
        assert "future" in _reply(update).lower()


# ── Community ────────────────────────────────────────────────────

class TestCommunityCommands:
    async def test_ask_usage(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["--named"]
        await ask_command(update, mock_context)
        assert "Usage" in _reply(update)

    async def test_ask_and_answer(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["Is", "spotting", "normal?"]
        await ask_command(update, mock_context)
        assert "Anonymous" in _reply(update)

        question = get_repo(mock_context, 1000, "questions").load()[0]
        mock_context.args = [question.id, "--named", "Often", "yes"]
        await answer_command(update, mock_context)
        assert "answer has been posted" in _reply(update)

        loaded = get_repo(mock_context, 1000, "questions").load()[0]
        assert loaded.answers[0].answer == "Often yes"
        assert loaded.answers[0].is_anonymous is False

        mock_context.args = []
        await questions_command(update, mock_context)
        assert "Is spotting normal?" in _reply(update)

    async def test_answer_unknown_question(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["nope", "hello"]
        await answer_command(update, mock_context)
        assert "No question" in _reply(update)


# ── /learn, /about ───────────────────────────────────────────────

class TestInfoCommands:
    async def test_learn_overview(self, make_update, mock_context):
        update = make_update()
        await learn_command(update, mock_context)
        assert "Contraception Guide" in _reply(update)

    async def test_learn_method(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["IUD"]
        await learn_command(update, mock_context)
        assert "Intrauterine Device" in _reply(update)

    async def test_learn_article(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["Planning-Pregnancy"]
        await learn_command(update, mock_context)
        assert "folic acid" in _reply(update)

    async def test_learn_search_hit(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["emergency"]
        await learn_command(update, mock_context)
        assert "What is emergency contraception?" in _reply(update)

    async def test_learn_nothing_found(self, make_update, mock_context):
        update = make_update()
        mock_context.args = ["xyzzy"]
        await learn_command(update, mock_context)
        assert "Nothing found" in _reply(update)

    async def test_about_shows_version(self, make_update, mock_context):
        update = make_update()
        await about_command(update, mock_context)
        assert VERSION in _reply(update)


# ── /tip ─────────────────────────────────────────────────────────

class TestTipCommand:
    def setup_method(self):
        _ai_call_timestamps.clear()

    async def test_success(self, make_update, mock_context):
        update = make_update()
        with patch("femcare.handlers.generate_tip", new_callable=AsyncMock) as mock_ai:
            mock_ai.return_value = "Go for a walk."
            await tip_command(update, mock_context)
        assert "Go for a walk." in _reply(update)

    async def test_ai_failure(self, make_update, mock_context):
        update = make_update()
        with patch("femcare.handlers.generate_tip", new_callable=AsyncMock) as mock_ai:
            mock_ai.side_effect = RuntimeError("API down")
            await tip_command(update, mock_context)
        assert "Couldn't get a tip" in _reply(update)

    async def test_disabled_without_key(self, make_update, mock_context):
        update = make_update()
        with patch("femcare.handlers.tips_enabled", return_value=False):
            await tip_command(update, mock_context)
        assert "not enabled" in _reply(update)

    async def test_requires_cycle(self, make_update, mock_context):
        update = make_update(chat_id=3000)
        await tip_command(update, mock_context)
        assert "No cycles" in _reply(update)


# ── Inline buttons ───────────────────────────────────────────────

class TestButtonHandler:
    async def test_menu(self, make_update, mock_context):
        update = make_update()
        update.callback_query.data = "menu"
        await button_handler(update, mock_context)
        text = update.callback_query.edit_message_text.call_args[0][0]
        assert "Main Menu" in text

    async def test_cycles_button(self, make_update, mock_context):
        update = make_update()
        update.callback_query.data = "cycles"
        await button_handler(update, mock_context)
        text = update.callback_query.edit_message_text.call_args[0][0]
        assert "Logged Cycles" in text

    async def test_unknown_data_ignored(self, make_update, mock_context):
        update = make_update()
        update.callback_query.data = "bogus"
        await button_handler(update, mock_context)
        update.callback_query.edit_message_text.assert_not_called()
