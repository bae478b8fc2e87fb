import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "iakwe-dev-secret"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # supabase | mysql | memory
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "supabase").lower()

    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_KEY = os.environ.get("SUPABASE_KEY", os.environ.get("SUPABASE_ANON_KEY", ""))
    HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "10"))

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "iakwe_hr")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    # Serve sample records when a list cannot be loaded (development only).
    SAMPLE_DATA_FALLBACK = _flag("SAMPLE_DATA_FALLBACK", "0")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
