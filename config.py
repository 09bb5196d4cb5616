from os import getenv
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database settings
DATABASE_URL = getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/MovieDB.db")
DB_ECHO = getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

DB_TIMEOUT = getenv("DB_TIMEOUT", "5")
try:
    DB_TIMEOUT = float(DB_TIMEOUT)
except ValueError:
    raise ValueError("DB_TIMEOUT must be a number of seconds")

# Request handling
REQUEST_TIMEOUT = getenv("REQUEST_TIMEOUT", "10")
try:
    REQUEST_TIMEOUT = float(REQUEST_TIMEOUT)
except ValueError:
    raise ValueError("REQUEST_TIMEOUT must be a number of seconds")

# Server settings
HOST = getenv("HOST", "127.0.0.1")
PORT = getenv("PORT", "3000")
if not PORT.isdigit():
    raise ValueError("PORT must be an integer")
PORT = int(PORT)

CORS_ORIGINS = [o.strip() for o in getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Logging
LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()
ERROR_LOG_FILE = getenv("ERROR_LOG_FILE")
