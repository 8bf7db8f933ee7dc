"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Tests run against a private in-memory database and never reach Telegram
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RECOMPUTE_TIMERS_ON_STARTUP"] = "false"
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["TELEGRAM_CHAT_ID"] = ""
os.environ.setdefault("ENVIRONMENT", "test")

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))
