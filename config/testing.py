SECRET_KEY = "test-secret"
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
SUPABASE_URL = ""
SUPABASE_KEY = ""
HTTP_TIMEOUT = 1.0

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "iakwe_hr_test",
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
SAMPLE_DATA_FALLBACK = False
