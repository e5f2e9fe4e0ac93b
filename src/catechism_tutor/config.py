"""Paths and defaults."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
CONTENT_DIR = BASE_DIR / "content"

DEFAULT_DB_PATH = os.environ.get(
    "CATECHISM_TUTOR_DB", str(Path.home() / ".catechism_tutor" / "tutor.db")
)
LOG_LEVEL = os.environ.get("CATECHISM_TUTOR_LOG_LEVEL", "WARNING")

SESSION_LENGTH = 10

LANGUAGES = {
    "en": "English",
    "zh": "中文",
}
DEFAULT_LANGUAGE = "en"

SPEECH_LANGUAGE_TAGS = {
    "en": "en-US",
    "zh": "zh-CN",
}

CONTEXT_LIMIT = 5
FALLBACK_CONTEXT_SIZE = 3
