import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

VERSION = "0.1.0"

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", BASE_DIR / "logs"))

DATA_DIR.mkdir(exist_ok=True)
LOGS_DIR.mkdir(exist_ok=True)

TELEGRAM_BOT_TOKEN = os.environ["TELEGRAM_BOT_TOKEN"]
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")

CHAT_MODEL = os.getenv("CHAT_MODEL", "claude-sonnet-4-6")

DEFAULT_CYCLE_LENGTH = int(os.getenv("DEFAULT_CYCLE_LENGTH", "28"))
DEFAULT_PERIOD_LENGTH = int(os.getenv("DEFAULT_PERIOD_LENGTH", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DB_PATH = DATA_DIR / "femcare.db"
