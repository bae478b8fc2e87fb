import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Without Supabase credentials, development runs on the in-memory store.
STORE_BACKEND = os.getenv("STORE_BACKEND", "supabase" if Config.SUPABASE_URL else "memory").lower()
SUPABASE_URL = Config.SUPABASE_URL
SUPABASE_KEY = Config.SUPABASE_KEY
HTTP_TIMEOUT = Config.HTTP_TIMEOUT

DB_CONFIG = dict(DB_CONFIG)

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed sample employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SAMPLE_DATA_FALLBACK = bool(int(os.getenv("SAMPLE_DATA_FALLBACK", "1")))
