from .base import *  # noqa: F401,F403

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

OPENAI_API_KEY = "sk-test"
OPENAI_ASSISTANT_ID = "asst_chat_test"
OPENAI_GOAL_ASSISTANT_ID = "asst_goal_test"
OPENAI_BASE_URL = ""
ASSISTANT_POLL_INTERVAL = 0
ASSISTANT_RUN_TIMEOUT = None

LOG_LEVEL = "WARNING"
LOGGING["loggers"]["apps"]["level"] = LOG_LEVEL  # noqa: F405
