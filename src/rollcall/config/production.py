import os

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql").lower()

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rollcall_db"),
}

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "rollcall")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ENFORCE_UNIQUE_SESSION_CODES = bool(int(os.getenv("ENFORCE_UNIQUE_SESSION_CODES", "1")))
SESSION_CODE_MAX_ATTEMPTS = int(os.getenv("SESSION_CODE_MAX_ATTEMPTS", "10"))
SURFACE_ACTIVE_SESSION_ERRORS = bool(int(os.getenv("SURFACE_ACTIVE_SESSION_ERRORS", "0")))
IN_QUERY_CHUNK_SIZE = int(os.getenv("IN_QUERY_CHUNK_SIZE", "30"))
