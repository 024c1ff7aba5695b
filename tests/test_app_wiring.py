from fabric_cli.app import App, create_app
from fabric_cli.config.settings import Environment, LogLevel, Settings
from fabric_cli.infrastructure.logging import get_logger, is_configured


def test_create_app_uses_default_settings(monkeypatch):
    monkeypatch.delenv("FABRIC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FABRIC_ENVIRONMENT", raising=False)

    app = create_app()

    assert isinstance(app, App)
    assert isinstance(app.settings, Settings)
    assert app.settings.environment == Environment.PRODUCTION
    assert app.settings.log_level == LogLevel.INFO


def test_create_app_with_custom_settings(test_settings):
    """Test create_app with custom settings using fixture."""
    app = create_app(settings=test_settings)
    assert app.settings is test_settings
    assert app.settings.environment == Environment.TESTING
    assert app.settings.log_level == LogLevel.CRITICAL


def test_create_app_configures_logging():
    assert is_configured() is False
    _ = create_app()
    assert is_configured() is True


def test_logger_usable_after_create_app(test_settings):
    create_app(settings=test_settings)

    logger = get_logger(__name__)
    logger.critical("wiring check")
