"""
Configuration classes for different environments.
"""
import os
import tempfile
from pathlib import Path

DATA_DIR = Path(os.getenv("CAMBIO_DATA_DIR", "data"))


class Config:
    """Base configuration."""

    # Flask
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1 MB, CSV uploads only

    # Tracker
    CAMBIO_CONFIG_PATH = os.getenv("CAMBIO_CONFIG_PATH")
    CAMBIO_DATA_FILE = os.getenv("CAMBIO_DATA_FILE", str(DATA_DIR / "cambio_scores.json"))

    # CORS: comma-separated list of allowed origins
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    CAMBIO_DATA_FILE = str(Path(tempfile.gettempdir()) / "cambio_test_scores.json")


config: dict[str, type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
