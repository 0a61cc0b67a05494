"""Application settings read from the environment.

Protean's own configuration (providers, processing mode) lives in
``domain.toml`` next to the domain module. The values here cover the parts
Protean does not know about: credentials, pagination limits and logging.
Each setting is read at call time so tests can override it with
``monkeypatch.setenv``.
"""

import os

DEFAULT_JWT_SECRET = "dev-secret-change-me"


def environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("ENV") or os.getenv("PROTEAN_ENV") or "development").lower()


def jwt_secret() -> str:
    return os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)


def jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def access_token_ttl_minutes() -> int:
    return int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "60"))


def default_page_size() -> int:
    return int(os.getenv("DEFAULT_PAGE_SIZE", "10"))


def max_page_size() -> int:
    return int(os.getenv("MAX_PAGE_SIZE", "100"))


def currency() -> str:
    return os.getenv("CURRENCY", "USD")


def log_level() -> str | None:
    return os.getenv("LOG_LEVEL")


def log_dir() -> str | None:
    """Directory for rotating log files. Console-only logging when unset."""
    return os.getenv("LOG_DIR")


def payment_gateway() -> str:
    return os.getenv("PAYMENT_GATEWAY", "fake")
