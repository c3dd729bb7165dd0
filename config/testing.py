import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "personnel_test_db"),
}

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads-test")
MAX_PHOTO_BYTES = 5 * 1024 * 1024
# Cheap hashing keeps the test suite fast; still salted.
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
SESSION_DAYS = 1

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
