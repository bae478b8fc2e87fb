import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
LOG_LEVEL = Config.LOG_LEVEL

STORE_BACKEND = Config.STORE_BACKEND
SUPABASE_URL = Config.SUPABASE_URL
SUPABASE_KEY = Config.SUPABASE_KEY
HTTP_TIMEOUT = Config.HTTP_TIMEOUT

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = False

# Degraded reads return empty lists with a notice, never sample data.
SAMPLE_DATA_FALLBACK = False
