from pathlib import Path

from handyhearts.config.settings import Settings, default_catalog_path


def test_defaults(tmp_path):
    settings = Settings.load(project_root=tmp_path, environ={})
    assert settings.service_catalog == default_catalog_path()
    assert settings.payment_mode == "offline"
    assert settings.payment_currency == "usd"
    assert settings.jwt_algorithm == "HS256"
    assert settings.max_booking_hours == 12.0
    assert settings.cors_origins == ["*"]
    assert settings.log_level == "INFO"
    assert not settings.stripe_enabled


def test_environment_overrides(tmp_path):
    settings = Settings.load(project_root=tmp_path, environ={
        "HANDYHEARTS_CATALOG": "/srv/catalog.csv",
        "PAYMENT_MODE": " Stripe ",
        "PAYMENT_CURRENCY": "CAD",
        "STRIPE_SECRET_KEY": "sk_test_123",
        "MAX_BOOKING_HOURS": "8",
        "CORS_ORIGINS": "https://app.handyhearts.example, http://localhost:5173",
        "LOG_LEVEL": "debug",
    })
    assert settings.service_catalog == Path("/srv/catalog.csv")
    assert settings.payment_mode == "stripe"
    assert settings.payment_currency == "cad"
    assert settings.stripe_enabled
    assert settings.max_booking_hours == 8.0
    assert settings.cors_origins == ["https://app.handyhearts.example", "http://localhost:5173"]
    assert settings.log_level == "DEBUG"


def test_empty_secrets_are_unset(tmp_path):
    settings = Settings.load(project_root=tmp_path, environ={"STRIPE_SECRET_KEY": "", "JWT_SECRET": ""})
    assert settings.stripe_secret_key is None
    assert settings.jwt_secret is None
