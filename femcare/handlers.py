import logging
import time
from collections import defaultdict
from datetime import date

from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.ext import ContextTypes

from config.settings import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH, VERSION
from femcare.ai import generate_tip, tips_enabled
from femcare.cycle import PHASE_DESCRIPTIONS, PHASE_LABELS
from femcare.dates import format_date, format_short_date, time_ago, utcnow
from femcare.db import STORAGE_KEYS, Database, Repository
from femcare.education import (
    ARTICLES,
    CONTRACEPTIVE_METHODS,
    FAQS,
    MYTHS_AND_FACTS,
    format_article,
    format_method,
    search,
)
from femcare.models import (
    FREQUENCIES,
    HEALTH_SYMPTOMS,
    MOODS,
    REMINDER_TYPES,
    CycleRecord,
    HealthLog,
    Question,
    Reminder,
)
from femcare import records
from femcare.records import StorageError

MAX_TEXT_LENGTH = 500
AI_RATE_LIMIT = 5
AI_RATE_WINDOW = 60.0
_ai_call_timestamps: dict[int, list[float]] = defaultdict(list)

MIN_CYCLE_LENGTH = 20
MAX_CYCLE_LENGTH = 45
MIN_PERIOD_LENGTH = 1
MAX_PERIOD_LENGTH = 10

COLLECTIONS = {
    "cycles": (STORAGE_KEYS["CYCLES"], CycleRecord),
    "reminders": (STORAGE_KEYS["REMINDERS"], Reminder),
    "health": (STORAGE_KEYS["HEALTH_LOGS"], HealthLog),
    "questions": (STORAGE_KEYS["QUESTIONS"], Question),
}

SAVE_FAILED = "Failed to save, please try again."

logger = logging.getLogger(__name__)


MAIN_KEYBOARD = InlineKeyboardMarkup([
    [
        InlineKeyboardButton("📊 Dashboard", callback_data="dashboard"),
        InlineKeyboardButton("🔮 Predictions", callback_data="predict"),
    ],
    [
        InlineKeyboardButton("🩸 Cycles", callback_data="cycles"),
        InlineKeyboardButton("💊 Reminders", callback_data="reminders"),
    ],
    [
        InlineKeyboardButton("📝 Health Log", callback_data="health"),
        InlineKeyboardButton("💬 Community", callback_data="questions"),
    ],
    [
        InlineKeyboardButton("📚 Learn", callback_data="learn"),
        InlineKeyboardButton("💡 Tip", callback_data="tip"),
    ],
])

BACK_KEYBOARD = InlineKeyboardMarkup([
    [InlineKeyboardButton("🔙 Back to Menu", callback_data="menu")],
])


def _check_ai_rate_limit(chat_id: int) -> bool:
    """Return True if the chat is within rate limits."""
    now = time.monotonic()
    timestamps = _ai_call_timestamps[chat_id]
    _ai_call_timestamps[chat_id] = [t for t in timestamps if now - t < AI_RATE_WINDOW]
    if len(_ai_call_timestamps[chat_id]) >= AI_RATE_LIMIT:
        return False
    _ai_call_timestamps[chat_id].append(now)
    return True


def _escape_markdown(text: str) -> str:
    """Escape Markdown V1 special characters in user-generated text."""
    for char in ('*', '_', '`', '['):
        text = text.replace(char, '\\' + char)
    return text


# ── Helpers ─────────────────────────────────────────────────────────

def get_db(context: ContextTypes.DEFAULT_TYPE) -> Database:
    return context.bot_data["db"]


def get_repo(context: ContextTypes.DEFAULT_TYPE, chat_id: int, collection: str) -> Repository:
    key, model = COLLECTIONS[collection]
    return get_db(context).repository(chat_id, key, model)


def _split_named(args: list[str]) -> tuple[bool, list[str]]:
    """Strip a leading --named flag. Returns (anonymous, remaining args)."""
    if args and args[0] in ("--named", "-n"):
        return False, args[1:]
    return True, args


def _parse_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _parse_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _normalize_symptoms(text: str) -> list[str]:
    known = {s.lower(): s for s in HEALTH_SYMPTOMS}
    symptoms = []
    for part in text.split(","):
        part = part.strip()
        if part:
            symptoms.append(known.get(part.lower(), part))
    return symptoms


def _author(anonymous: bool) -> str:
    return "Anonymous" if anonymous else "User"


# ── Text builders (shared by commands and buttons) ──────────────────

def _relative_days(days: int, past: str) -> str:
    if days == 0:
        return "today"
    if days < 0:
        return f"{-days} day{'s' if days < -1 else ''} {past}"
    return f"in {days} day{'s' if days > 1 else ''}"


def _prediction_lines(info: dict) -> list[str]:
    window = info["fertile_window"]
    lines = [
        f"📅 Cycle day: *{info['cycle_day']}*",
        f"Phase: *{PHASE_LABELS[info['phase']]}*",
        f"{PHASE_DESCRIPTIONS[info['phase']]}",
        "",
        f"🩸 Next period: *{format_short_date(info['next_period'])}* "
        f"({_relative_days(info['days_until_period'], 'late')})",
        f"✨ Ovulation: *{format_short_date(info['ovulation'])}* "
        f"({_relative_days(info['days_until_ovulation'], 'ago')})",
        f"🌱 Fertile window: *{format_short_date(window.start)} - {format_short_date(window.end)}*",
    ]
    if info["is_in_fertile_window"]:
        lines.append("🌸 You're in your fertile window")
    return lines


def _no_cycles_text() -> str:
    return (
        "No cycles logged yet.\n"
        "Log your last period with `/cycle YYYY-MM-DD [length]`\n"
        "Example: `/cycle 2026-02-15 28`"
    )


def build_dashboard_text(context, chat_id: int, today: date) -> str:
    cycles = get_repo(context, chat_id, "cycles").load()
    reminders = get_repo(context, chat_id, "reminders").load()
    logs = get_repo(context, chat_id, "health").load()

    lines = [f"📊 *Dashboard* — {format_date(today)}\n"]
    info = records.current_cycle_info(cycles, today)
    lines += _prediction_lines(info) if info else [_no_cycles_text()]

    upcoming = records.upcoming_reminders(reminders)
    lines.append("\n💊 *Active reminders:*")
    if upcoming:
        lines += [f"• {r.time} {_escape_markdown(r.title)} ({r.frequency_label})" for r in upcoming]
    else:
        lines.append("None yet. Add one with /remind")

    recent = records.recent_health_logs(logs)
    lines.append("\n📝 *Recent health:*")
    if recent:
        lines += [f"• {format_short_date(log.date)}: {log.mood}" for log in recent]
    else:
        lines.append("Nothing logged. Try /health")
    return "\n".join(lines)


def build_predictions_text(context, chat_id: int, today: date) -> str:
    cycles = get_repo(context, chat_id, "cycles").load()
    info = records.current_cycle_info(cycles, today)
    if info is None:
        return _no_cycles_text()
    return "🔮 *Your Cycle Predictions*\n\n" + "\n".join(_prediction_lines(info))


def build_cycles_text(context, chat_id: int) -> str:
    cycles = get_repo(context, chat_id, "cycles").load()
    if not cycles:
        return _no_cycles_text()
    lines = ["🩸 *Logged Cycles:*\n"]
    for c in sorted(cycles, key=lambda c: c.start_date, reverse=True)[:10]:
        span = format_date(c.start_date)
        if c.end_date:
            span += f" - {format_date(c.end_date)}"
        lines.append(f"`{c.id}` {span}\n   {c.cycle_length}-day cycle, {c.period_length}-day period")
        if c.symptoms:
            lines.append(f"   {_escape_markdown(', '.join(c.symptoms))}")
    lines.append("\nDelete with `/deletecycle <id>`")
    return "\n".join(lines)


def build_reminders_text(context, chat_id: int) -> str:
    reminders = get_repo(context, chat_id, "reminders").load()
    if not reminders:
        return (
            "💊 No reminders yet.\n"
            "Usage: `/remind <type> <frequency> <HH:MM> <title>`\n"
            "Example: `/remind pill daily 08:00 Morning pill`"
        )
    lines = ["💊 *Your Reminders:*\n"]
    for r in sorted(reminders, key=lambda r: r.created_at, reverse=True):
        status = "🔔" if r.is_active else "🔕"
        taken = time_ago(r.last_taken) if r.last_taken else "Never"
        lines.append(
            f"{status} `{r.id}` *{_escape_markdown(r.title)}*\n"
            f"   {r.type_label} · {r.frequency_label} at {r.time} · last taken: {taken}"
        )
    stats = records.reminder_stats(reminders)
    lines.append(
        f"\n📊 {stats['total']} total · {stats['active']} active · "
        f"{stats['pill']} pill · {stats['tracked']} tracked"
    )
    lines.append("\n`/taken <id>` · `/toggle <id>` · `/deletereminder <id>`")
    return "\n".join(lines)


def _trend_lines(trends: dict) -> list[str]:
    lines = [f"📈 *Trends* (last {trends['total_entries']} entries)"]
    if trends["avg_weight"] is not None:
        lines.append(f"Average weight: {trends['avg_weight']:.1f} kg")
    lines.append(f"Most common mood: {trends['most_common_mood']}")
    if trends["top_symptoms"]:
        top = ", ".join(f"{s} ({n})" for s, n in trends["top_symptoms"])
        lines.append(f"Top symptoms: {_escape_markdown(top)}")
    return lines


def build_health_text(context, chat_id: int) -> str:
    all_logs = get_repo(context, chat_id, "health").load()
    if not all_logs:
        return (
            "📝 No health logs yet.\n"
            "Usage: `/health <mood> [weight] [symptoms, ...]`\n"
            f"Moods: {', '.join(MOODS)}"
        )
    lines = _trend_lines(records.health_trends(all_logs))
    lines.append("\n📝 *Recent Health Logs:*\n")
    for log in records.recent_health_logs(all_logs, limit=10):
        line = f"`{log.id}` {format_date(log.date)} · mood: *{log.mood}*"
        if log.weight is not None:
            line += f" · {log.weight:g} kg"
        lines.append(line)
        if log.symptoms:
            lines.append(f"   {_escape_markdown(', '.join(log.symptoms))}")
        if log.notes:
            lines.append(f"   📝 {_escape_markdown(log.notes)}")
    return "\n".join(lines)


def build_questions_text(context, chat_id: int) -> str:
    questions = get_repo(context, chat_id, "questions").load()
    if not questions:
        return (
            "💬 No questions yet.\n"
            "Ask one with `/ask <question>` (add `--named` to post with your name)"
        )
    lines = ["💬 *Community Q&A:*\n"]
    for q in reversed(questions[-10:]):
        lines.append(
            f"❓ `{q.id}` {_escape_markdown(q.question)}\n"
            f"   {_author(q.is_anonymous)} · {time_ago(q.created_at)}"
        )
        for a in q.answers:
            lines.append(f"   ↳ {_escape_markdown(a.answer)} ({_author(a.is_anonymous)})")
    lines.append("\nReply with `/answer <id> <text>`")
    return "\n".join(lines)


def build_learn_text() -> str:
    lines = ["📚 *Contraception Guide*\n"]
    for key, method in CONTRACEPTIVE_METHODS.items():
        lines.append(f"• `{key}`: {method['name']} ({method['effectiveness']})")
    lines.append("\nDetails or search: `/learn <method, article or keyword>`\n\n*FAQ*")
    for question, answer in FAQS:
        lines.append(f"\n*{question}*\n{answer}")
    lines.append("\n*Family Planning*")
    for article_id, article in ARTICLES.items():
        lines.append(f"• `{article_id}`: {article['title']}")
    lines.append("\n*Myths & Facts*")
    for myth, fact in MYTHS_AND_FACTS:
        lines.append(f"❌ {myth}\n✅ {fact}")
    return "\n".join(lines)


# ── Commands ────────────────────────────────────────────────────────

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    chat_id = update.effective_chat.id
    text = (
        "Hi! 🌸 I'm *FemCare*, your reproductive-health tracker.\n"
        "I keep track of your cycles, reminders, health logs and questions.\n\n"
        + build_dashboard_text(context, chat_id, date.today())
    )
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def dashboard_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_dashboard_text(context, update.effective_chat.id, date.today())
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def predict_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_predictions_text(context, update.effective_chat.id, date.today())
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def cycle_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Log a period: /cycle <start> [cycle_length] [period_length] [end]."""
    if not context.args:
        await update.message.reply_text(
            "Usage: `/cycle <start> [cycle_length] [period_length] [end]`\n"
            "Example: `/cycle 2026-02-15 28 5`",
            parse_mode="Markdown",
        )
        return

    try:
        start = date.fromisoformat(context.args[0])
        end = date.fromisoformat(context.args[3]) if len(context.args) > 3 else None
    except ValueError:
        await update.message.reply_text(
            "Wrong date format. Use YYYY-MM-DD, like `2026-02-15`",
            parse_mode="Markdown",
        )
        return

    try:
        cycle_length = int(context.args[1]) if len(context.args) > 1 else DEFAULT_CYCLE_LENGTH
        period_length = int(context.args[2]) if len(context.args) > 2 else DEFAULT_PERIOD_LENGTH
    except ValueError:
        await update.message.reply_text("Cycle and period length must be numbers.")
        return

    if not MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        await update.message.reply_text(
            f"Cycle length should be between {MIN_CYCLE_LENGTH} and {MAX_CYCLE_LENGTH} days."
        )
        return
    if not MIN_PERIOD_LENGTH <= period_length <= MAX_PERIOD_LENGTH:
        await update.message.reply_text(
            f"Period length should be between {MIN_PERIOD_LENGTH} and {MAX_PERIOD_LENGTH} days."
        )
        return
    if start > date.today():
        await update.message.reply_text("That date is in the future! Use a past or today's date.")
        return

    chat_id = update.effective_chat.id
    repo = get_repo(context, chat_id, "cycles")
    try:
        record = records.add_cycle(repo, start, cycle_length, period_length, end_date=end)
    except ValueError as e:
        await update.message.reply_text(str(e))
        return
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return

    logger.info(f"Chat {chat_id}: logged cycle starting {start} ({cycle_length} days)")
    info = records.current_cycle_info([record], date.today())
    text = "✅ Cycle saved!\n\n" + "\n".join(_prediction_lines(info))
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def cycles_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_cycles_text(context, update.effective_chat.id)
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def _delete_command(update, context, collection: str, label: str, delete):
    if not context.args:
        await update.message.reply_text(f"Usage: `/delete{label} <id>`", parse_mode="Markdown")
        return
    repo = get_repo(context, update.effective_chat.id, collection)
    try:
        deleted = delete(repo, context.args[0])
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return
    if deleted:
        await update.message.reply_text(f"🗑 Deleted {label} `{context.args[0]}`.", parse_mode="Markdown")
    else:
        await update.message.reply_text(f"No {label} with that id.")


async def deletecycle_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _delete_command(update, context, "cycles", "cycle", records.delete_cycle)


async def remind_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Create a reminder: /remind <type> <frequency> <HH:MM> <title...>."""
    if len(context.args) < 4:
        await update.message.reply_text(
            "Usage: `/remind <type> <frequency> <HH:MM> <title>`\n"
            f"Types: {', '.join(REMINDER_TYPES)}\n"
            f"Frequencies: {', '.join(FREQUENCIES)}\n"
            "Example: `/remind pill daily 08:00 Morning pill`",
            parse_mode="Markdown",
        )
        return

    kind, frequency, at = (a.lower() for a in context.args[:3])
    title = " ".join(context.args[3:])[:MAX_TEXT_LENGTH]
    repo = get_repo(context, update.effective_chat.id, "reminders")
    try:
        reminder = records.add_reminder(repo, kind, title, at, frequency)
    except ValueError as e:
        await update.message.reply_text(f"Couldn't create the reminder: {e}")
        return
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return

    await update.message.reply_text(
        f"✅ Reminder created: *{_escape_markdown(reminder.title)}*\n"
        f"{reminder.type_label} · {reminder.frequency_label} at {reminder.time}\n"
        f"Id: `{reminder.id}`",
        parse_mode="Markdown",
        reply_markup=MAIN_KEYBOARD,
    )


async def reminders_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_reminders_text(context, update.effective_chat.id)
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def toggle_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not context.args:
        await update.message.reply_text("Usage: `/toggle <id>`", parse_mode="Markdown")
        return
    repo = get_repo(context, update.effective_chat.id, "reminders")
    try:
        reminder = records.toggle_reminder(repo, context.args[0])
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return
    if reminder is None:
        await update.message.reply_text("No reminder with that id.")
        return
    state = "on 🔔" if reminder.is_active else "off 🔕"
    await update.message.reply_text(f"Reminder *{_escape_markdown(reminder.title)}* is now {state}", parse_mode="Markdown")


async def taken_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not context.args:
        await update.message.reply_text("Usage: `/taken <id>`", parse_mode="Markdown")
        return
    repo = get_repo(context, update.effective_chat.id, "reminders")
    try:
        reminder = records.mark_taken(repo, context.args[0], utcnow())
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return
    if reminder is None:
        await update.message.reply_text("No reminder with that id.")
        return
    await update.message.reply_text(f"✅ Marked *{_escape_markdown(reminder.title)}* as taken.", parse_mode="Markdown")


async def deletereminder_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _delete_command(update, context, "reminders", "reminder", records.delete_reminder)


async def health_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Log today's health: /health [YYYY-MM-DD] <mood> [weight] [symptoms, ...; notes]."""
    args = list(context.args)
    if not args:
        await update.message.reply_text(
            "Usage: `/health [date] <mood> [weight] [symptom, symptom; notes]`\n"
            f"Moods: {', '.join(MOODS)}\n"
            "Example: `/health okay 61.5 cramps, fatigue; slept badly`",
            parse_mode="Markdown",
        )
        return

    log_date = _parse_date(args[0])
    if log_date is None:
        log_date = date.today()
    else:
        args = args[1:]
    if log_date > date.today():
        await update.message.reply_text("That date is in the future! Use a past or today's date.")
        return
    if not args:
        await update.message.reply_text(f"Please add your mood: {', '.join(MOODS)}")
        return

    mood, rest = args[0].lower(), args[1:]
    weight = _parse_float(rest[0]) if rest else None
    if weight is not None:
        rest = rest[1:]

    symptoms_text, _, notes = " ".join(rest)[:MAX_TEXT_LENGTH].partition(";")
    repo = get_repo(context, update.effective_chat.id, "health")
    try:
        log, updated = records.save_health_log(
            repo, log_date, mood, weight=weight,
            symptoms=_normalize_symptoms(symptoms_text), notes=notes,
        )
    except ValueError as e:
        await update.message.reply_text(str(e))
        return
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return

    verb = "updated" if updated else "saved"
    await update.message.reply_text(
        f"✅ Health log {verb} for {format_date(log.date)} (mood: *{log.mood}*)",
        parse_mode="Markdown",
        reply_markup=MAIN_KEYBOARD,
    )


async def healthlogs_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_health_text(context, update.effective_chat.id)
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def deletehealth_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _delete_command(update, context, "health", "health", records.delete_health_log)


async def ask_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    anonymous, args = _split_named(list(context.args))
    if not args:
        await update.message.reply_text(
            "Usage: `/ask [--named] <question>`", parse_mode="Markdown"
        )
        return
    repo = get_repo(context, update.effective_chat.id, "questions")
    try:
        question = records.post_question(repo, " ".join(args)[:MAX_TEXT_LENGTH], anonymous)
    except ValueError as e:
        await update.message.reply_text(str(e))
        return
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return
    await update.message.reply_text(
        f"✅ Your question has been posted ({_author(anonymous)}). Id: `{question.id}`",
        parse_mode="Markdown",
    )


async def questions_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = build_questions_text(context, update.effective_chat.id)
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def answer_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    args = list(context.args)
    if len(args) < 2:
        await update.message.reply_text(
            "Usage: `/answer <id> [--named] <answer>`", parse_mode="Markdown"
        )
        return
    question_id = args[0]
    anonymous, args = _split_named(args[1:])
    repo = get_repo(context, update.effective_chat.id, "questions")
    try:
        answer = records.post_answer(repo, question_id, " ".join(args)[:MAX_TEXT_LENGTH], anonymous)
    except ValueError as e:
        await update.message.reply_text(str(e))
        return
    except StorageError:
        await update.message.reply_text(SAVE_FAILED)
        return
    if answer is None:
        await update.message.reply_text("No question with that id.")
        return
    await update.message.reply_text("✅ Your answer has been posted.")


async def deletequestion_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _delete_command(update, context, "questions", "question", records.delete_question)


async def learn_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if context.args:
        key = context.args[0].lower()
        text = format_method(key) or format_article(key)
        if text is None:
            hits = search(" ".join(context.args))
            if not hits:
                await update.message.reply_text(
                    f"Nothing found. Try one of: {', '.join(CONTRACEPTIVE_METHODS)}"
                )
                return
            text = "\n\n".join(hits[:3])
    else:
        text = build_learn_text()
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def _tip_text(context, chat_id: int) -> str:
    if not tips_enabled():
        return "Tips are not enabled on this bot."
    cycles = get_repo(context, chat_id, "cycles").load()
    info = records.current_cycle_info(cycles, date.today())
    if info is None:
        return _no_cycles_text()
    if not _check_ai_rate_limit(chat_id):
        return "Too many tips at once! Try again in a minute."

    logs = records.recent_health_logs(get_repo(context, chat_id, "health").load(), limit=3)
    symptoms = [s for log in logs for s in log.symptoms]
    try:
        tip = await generate_tip(info["phase"].value, info["cycle_day"], symptoms)
    except Exception as e:
        logger.error(f"AI tip generation failed: {e}")
        return "Couldn't get a tip right now. Try again in a moment."
    return f"💡 *Tip for your {info['phase'].value} phase:*\n\n{tip}"


async def tip_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    text = await _tip_text(context, update.effective_chat.id)
    await update.message.reply_text(text, parse_mode="Markdown", reply_markup=MAIN_KEYBOARD)


async def about_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        f"🌸 *FemCare* v{VERSION}\n\n"
        "Track cycles, birth-control reminders, daily health and questions.\n"
        "Predictions use a simple calendar heuristic and are not medical advice.",
        parse_mode="Markdown",
    )


# ── Inline menu ─────────────────────────────────────────────────────

async def button_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle all inline keyboard button presses."""
    query = update.callback_query
    await query.answer()
    chat_id = query.message.chat_id
    data = query.data
    today = date.today()

    if data == "menu":
        await query.edit_message_text(
            "🌸 *FemCare — Main Menu*\n\nWhat would you like to see?",
            parse_mode="Markdown",
            reply_markup=MAIN_KEYBOARD,
        )
        return

    if data == "dashboard":
        text = build_dashboard_text(context, chat_id, today)
    elif data == "predict":
        text = build_predictions_text(context, chat_id, today)
    elif data == "cycles":
        text = build_cycles_text(context, chat_id)
    elif data == "reminders":
        text = build_reminders_text(context, chat_id)
    elif data == "health":
        text = build_health_text(context, chat_id)
    elif data == "questions":
        text = build_questions_text(context, chat_id)
    elif data == "learn":
        text = build_learn_text()
    elif data == "tip":
        text = await _tip_text(context, chat_id)
    else:
        logger.warning(f"Unknown callback data: {data!r}")
        return
    await query.edit_message_text(text, parse_mode="Markdown", reply_markup=BACK_KEYBOARD)
