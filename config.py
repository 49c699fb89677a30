import os

from dotenv import load_dotenv

# Загрузка .env
load_dotenv()

BOT_TOKEN = os.getenv("BOT_TOKEN")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./lexical.db")

# Словарь, с которого берём транскрипцию, перевод и озвучку
DICTIONARY_BASE_URL = os.getenv("DICTIONARY_BASE_URL", "https://dict.laban.vn")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

HISTORY_PAGE_SIZE = int(os.getenv("HISTORY_PAGE_SIZE", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
