import os
import tempfile
from pathlib import Path

SECRET_KEY = "test-secret"
PORT = 3000

STORE_BACKEND = "json"
DB_FILE = os.getenv("DB_FILE", str(Path(tempfile.gettempdir()) / "checkin_desk_test_db.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_db_test"),
}

AUTO_INIT_DB = False

PUBLIC_DIR = os.getenv("PUBLIC_DIR", str(Path(tempfile.gettempdir()) / "checkin_desk_public"))

TUNNEL_ENABLED = False
TUNNEL_HOST = "nokey@localhost.run"
TUNNEL_RETRY_SECONDS = 5.0

LOG_LEVEL = "WARNING"
LOG_FILE = None

DEBUG = False
TESTING = True
