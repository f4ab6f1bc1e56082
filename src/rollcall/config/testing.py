import os

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql").lower()

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rollcall_test"),
}

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "rollcall_test")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ENFORCE_UNIQUE_SESSION_CODES = True
SESSION_CODE_MAX_ATTEMPTS = 10
SURFACE_ACTIVE_SESSION_ERRORS = True
IN_QUERY_CHUNK_SIZE = 30
