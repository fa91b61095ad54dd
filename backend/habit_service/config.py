import os
from dotenv import load_dotenv

# .env lives at the project root, one level above backend/
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(os.path.dirname(current_dir))
dotenv_path = os.path.join(project_root, '.env')

load_dotenv(dotenv_path)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")  # console only when unset

# Progress entries older than this many days are purged
RETENTION_DAYS = int(os.getenv("RETENTION_DAYS", "30"))
PURGE_INTERVAL_SECONDS = int(os.getenv("PURGE_INTERVAL_SECONDS", str(60 * 60 * 24)))

REMINDER_HOUR = int(os.getenv("REMINDER_HOUR", "9"))
REMINDER_MINUTE = int(os.getenv("REMINDER_MINUTE", "0"))
REMINDER_MESSAGE = "Don't forget to complete your habits today!"

# Trailing window: the reference date and the 6 days before it
REPORT_WINDOW_DAYS = 7
