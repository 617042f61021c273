import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name):
    value = os.getenv(name)
    return int(value) if value else None


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Builder engine (debounce windows in milliseconds)
    BUILDER_HISTORY_DEBOUNCE_MS = int(os.getenv("BUILDER_HISTORY_DEBOUNCE_MS", "300"))
    BUILDER_AUTOSAVE_DEBOUNCE_MS = int(os.getenv("BUILDER_AUTOSAVE_DEBOUNCE_MS", "800"))
    BUILDER_EDITOR_DEBOUNCE_MS = int(os.getenv("BUILDER_EDITOR_DEBOUNCE_MS", "100"))
    BUILDER_AUTOSAVE_ENABLED = _env_flag("BUILDER_AUTOSAVE_ENABLED", True)
    BUILDER_MAX_SECTIONS = _env_int("BUILDER_MAX_SECTIONS")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///pagebuilder-dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "DEBUG"
    BUILDER_MAX_SECTIONS = None


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
