"""Settings — verifies URL normalization and derived flags."""

from portfolio.config import Settings


def test_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_async_urls_are_left_alone():
    url = "sqlite+aiosqlite:///:memory:"
    assert Settings(database_url=url).database_url == url


def test_media_configured_needs_all_credentials():
    assert not Settings(cloudinary_cloud_name="demo").media_configured
    assert Settings(
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
    ).media_configured


def test_is_production():
    assert Settings(environment="Production").is_production
    assert not Settings(environment="development").is_production
