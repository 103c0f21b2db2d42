import logging
from logging.handlers import RotatingFileHandler

from telegram import BotCommand
from telegram.ext import ApplicationBuilder, CallbackQueryHandler, CommandHandler

from config.settings import TELEGRAM_BOT_TOKEN, DB_PATH, LOGS_DIR, LOG_LEVEL
from femcare.db import Database
from femcare.handlers import (
    start_command,
    dashboard_command,
    predict_command,
    cycle_command,
    cycles_command,
    deletecycle_command,
    remind_command,
    reminders_command,
    toggle_command,
    taken_command,
    deletereminder_command,
    health_command,
    healthlogs_command,
    deletehealth_command,
    ask_command,
    questions_command,
    answer_command,
    deletequestion_command,
    learn_command,
    tip_command,
    about_command,
    button_handler,
)

logger = logging.getLogger(__name__)

COMMANDS = [
    ("start", start_command, "Welcome & main menu"),
    ("dashboard", dashboard_command, "Health overview"),
    ("predict", predict_command, "Cycle day, phase & predicted dates"),
    ("cycle", cycle_command, "Log a period"),
    ("cycles", cycles_command, "Logged cycles"),
    ("deletecycle", deletecycle_command, "Delete a logged cycle"),
    ("remind", remind_command, "Create a birth-control reminder"),
    ("reminders", reminders_command, "List reminders"),
    ("toggle", toggle_command, "Turn a reminder on/off"),
    ("taken", taken_command, "Mark a reminder as taken"),
    ("deletereminder", deletereminder_command, "Delete a reminder"),
    ("health", health_command, "Log mood, weight & symptoms"),
    ("healthlogs", healthlogs_command, "Recent health logs"),
    ("deletehealth", deletehealth_command, "Delete a health log"),
    ("ask", ask_command, "Ask the community"),
    ("questions", questions_command, "Community Q&A"),
    ("answer", answer_command, "Answer a question"),
    ("deletequestion", deletequestion_command, "Delete a question"),
    ("learn", learn_command, "Contraception guide"),
    ("tip", tip_command, "Phase-aware self-care tip"),
    ("about", about_command, "About this bot"),
]


def setup_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            RotatingFileHandler(
                LOGS_DIR / "femcare.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            ),
            logging.StreamHandler(),
        ],
    )
    # httpx logs every Telegram poll at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def post_init(application):
    """Register the bot commands menu on startup."""
    await application.bot.set_my_commands(
        [BotCommand(name, description) for name, _, description in COMMANDS]
    )


def build_app(db: Database):
    app = ApplicationBuilder().token(TELEGRAM_BOT_TOKEN).post_init(post_init).build()
    app.bot_data["db"] = db

    for name, handler, _ in COMMANDS:
        app.add_handler(CommandHandler(name, handler))
    app.add_handler(CallbackQueryHandler(button_handler))
    return app


def create_app() -> None:
    """Create and run the bot application."""
    setup_logging()
    logger.info("Starting FemCare bot...")

    db = Database(DB_PATH)
    logger.info(f"Using database at {DB_PATH}")

    app = build_app(db)
    logger.info("Bot is running. Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True)


if __name__ == "__main__":
    create_app()
