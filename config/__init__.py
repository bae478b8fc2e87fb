import os

_ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # SETTINGS_MODULE wins; otherwise APP_ENV picks one, 'development' by default
    explicit = os.getenv("SETTINGS_MODULE")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").lower()
    return _ENVIRONMENTS.get(env, "config.development")
