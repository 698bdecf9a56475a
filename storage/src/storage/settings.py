"""Environment-driven settings."""

import os

from dotenv import load_dotenv


def _home() -> str:
    return os.path.expanduser(os.getenv("TASKTRAIL_HOME", "~/.tasktrail"))


def load_config() -> dict:
    """Read settings from the environment (and .env in the working directory)."""
    load_dotenv()
    home = _home()
    database_url = os.getenv("TASKTRAIL_DATABASE_URL")
    if not database_url:
        os.makedirs(home, exist_ok=True)
        database_url = f"sqlite:///{os.path.join(home, 'tasktrail.db')}"
    return {
        "database_url": database_url,
        "log_level": os.getenv("TASKTRAIL_LOG_LEVEL", "INFO").upper(),
    }
