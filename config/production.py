import os
from pathlib import Path

BASE_DIR = Path(os.getenv("BASE_DIR", Path(__file__).resolve().parents[1]))

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
PORT = int(os.getenv("PORT", "3000"))

IS_VERCEL = os.getenv("VERCEL") == "1"

STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
DB_FILE = os.getenv("DB_FILE", "/tmp/db.json" if IS_VERCEL else str(BASE_DIR / "db.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_db"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PUBLIC_DIR = os.getenv("PUBLIC_DIR", str(BASE_DIR / "public"))

TUNNEL_ENABLED = bool(int(os.getenv("TUNNEL_ENABLED", "0" if IS_VERCEL else "1")))
TUNNEL_HOST = os.getenv("TUNNEL_HOST", "nokey@localhost.run")
TUNNEL_RETRY_SECONDS = float(os.getenv("TUNNEL_RETRY_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

DEBUG = False
