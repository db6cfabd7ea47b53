# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "member-directory")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8081"))

    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "member_directory")
    MONGO_COLLECTION: str = os.getenv("MONGO_COLLECTION", "members")
    MONGO_CONNECT_TIMEOUT_MS: int = int(os.getenv("MONGO_CONNECT_TIMEOUT_MS", "10000"))
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = int(
        os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "2000")
    )

    # "mongo" for production, "memory" for tests and local runs without a database
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "mongo").lower()

    STRICT_UPDATES: bool = os.getenv("STRICT_UPDATES", "false").lower() in {
        "1", "true", "yes", "on",
    }
    ID_UPPER_BOUND: int = int(os.getenv("ID_UPPER_BOUND", "99999999"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
