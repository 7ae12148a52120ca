import os
import logging
import secrets
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

PRODUCTION = "production"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    app_env: str
    data_dir: str
    frontend_url: Optional[str]
    jwt_secret: str
    log_level: str
    seed_demo_users: bool
    expose_dev_tokens: bool
    smtp_host: Optional[str]
    smtp_port: int
    smtp_user: Optional[str]
    smtp_pass: Optional[str]
    smtp_from: Optional[str]

    @property
    def is_production(self) -> bool:
        return self.app_env == PRODUCTION

    @property
    def smtp_configured(self) -> bool:
        return all([self.smtp_host, self.smtp_user, self.smtp_pass, self.smtp_from])

    @property
    def dev_token_exposure(self) -> bool:
        """Reset/verification tokens may be echoed in API responses only when
        explicitly enabled outside production and no real mail is delivered."""
        return self.expose_dev_tokens and not self.is_production and not self.smtp_configured


def load_settings() -> Settings:
    """Build settings from the process environment"""
    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        logger.warning("JWT_SECRET is not set. Using a random per-process secret.")
        jwt_secret = secrets.token_urlsafe(32)

    smtp_user = os.getenv("SMTP_USER")
    return Settings(
        app_env=os.getenv("APP_ENV", PRODUCTION).strip().lower(),
        data_dir=os.getenv("DATA_DIR", ".data"),
        frontend_url=os.getenv("FRONTEND_URL"),
        jwt_secret=jwt_secret,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        seed_demo_users=_env_flag("SEED_DEMO_USERS"),
        expose_dev_tokens=_env_flag("EXPOSE_DEV_TOKENS"),
        smtp_host=os.getenv("SMTP_HOST"),
        smtp_port=int(os.getenv("SMTP_PORT") or "587"),
        smtp_user=smtp_user,
        smtp_pass=os.getenv("SMTP_PASS"),
        smtp_from=os.getenv("SMTP_FROM") or smtp_user,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def validate_settings(settings: Settings) -> None:
    """Startup checks. Token exposure must never reach a production build."""
    if settings.expose_dev_tokens and settings.is_production:
        logger.error("EXPOSE_DEV_TOKENS is set while APP_ENV=production.")
        raise RuntimeError("EXPOSE_DEV_TOKENS cannot be enabled in production.")
    if settings.expose_dev_tokens and settings.smtp_configured:
        logger.warning("EXPOSE_DEV_TOKENS ignored: SMTP delivery is configured.")
    if settings.dev_token_exposure:
        logger.warning(f"Development token exposure is ACTIVE (APP_ENV={settings.app_env}).")
    if not settings.smtp_configured:
        logger.info("SMTP is not configured. Emails will be logged instead of sent.")
