"""
Centralized settings and path configuration for the HandyHearts backend.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def default_catalog_path() -> Path:
    """The catalog shipped inside the package."""
    return Path(__file__).resolve().parent.parent / 'data' / 'services.csv'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    project_root: Path

    # Service catalog
    service_catalog: Path

    # Payments
    payment_mode: str = "offline"  # "stripe" or "offline"
    payment_currency: str = "usd"
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None

    # Auth
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"

    # Request validation
    max_booking_hours: float = 12.0

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def stripe_enabled(self) -> bool:
        return self.payment_mode == "stripe" and bool(self.stripe_secret_key)

    @classmethod
    def load(cls, project_root: Optional[Path] = None, environ: Optional[dict] = None) -> 'Settings':
        """Load settings from the environment (and .env in the project root)."""
        root = project_root or get_project_root()
        if environ is None:
            load_dotenv(dotenv_path=root / '.env')
            environ = os.environ

        catalog = environ.get('HANDYHEARTS_CATALOG')
        origins = environ.get('CORS_ORIGINS', '*')

        return cls(
            project_root=root,
            service_catalog=Path(catalog) if catalog else default_catalog_path(),
            payment_mode=environ.get('PAYMENT_MODE', 'offline').strip().lower(),
            payment_currency=environ.get('PAYMENT_CURRENCY', 'usd').strip().lower(),
            stripe_secret_key=environ.get('STRIPE_SECRET_KEY') or None,
            stripe_webhook_secret=environ.get('STRIPE_WEBHOOK_SECRET') or None,
            jwt_secret=environ.get('JWT_SECRET') or None,
            jwt_algorithm=environ.get('JWT_ALGORITHM', 'HS256'),
            max_booking_hours=float(environ.get('MAX_BOOKING_HOURS', '12')),
            cors_origins=[o.strip() for o in origins.split(',') if o.strip()],
            log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
