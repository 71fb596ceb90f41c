"""API test fixtures — async DB, FastAPI test client, users and a fake media host.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test DB
    - Media dependencies overridden with FakeMedia; no test reaches Cloudinary

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - raise_app_exceptions=False so the catch-all handler's 500 reaches the test
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from portfolio.config import get_settings
from portfolio.core.domain_types import TokenType, UserRole
from portfolio.core.errors import MediaServiceError
from portfolio.core.security import create_token, hash_password
from portfolio.db.base import Base
from portfolio.infrastructure.database import get_db, DatabaseSessionManager
from portfolio.infrastructure.media_service import (
    UploadedAsset, get_media_service, get_optional_media_service,
)
from portfolio.models.user import User
import portfolio.infrastructure.database as db_module
from portfolio.main import app

ADMIN_PASSWORD = "admin-password-123"


class FakeMedia:
    """Stands in for CloudinaryClient; records every call."""

    def __init__(self):
        self.uploads: list[dict] = []
        self.destroyed: list[tuple[str, str]] = []
        self.fail_destroy = False

    async def upload(self, content, filename, mime_type, subfolder=None):
        self.uploads.append({
            "filename": filename, "mime_type": mime_type,
            "size": len(content), "subfolder": subfolder,
        })
        is_image = mime_type.startswith("image/") or mime_type == "application/pdf"
        public_id = f"portfolio/{subfolder}/{filename.rsplit('.', 1)[0]}"
        return UploadedAsset(
            url=f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}",
            public_id=public_id,
            resource_type="image" if is_image else "raw",
            mime_type=mime_type,
            size=len(content),
            original_name=filename,
            width=640 if mime_type.startswith("image/") else None,
            height=480 if mime_type.startswith("image/") else None,
        )

    async def destroy(self, public_id, resource_type="image"):
        if self.fail_destroy:
            raise MediaServiceError("boom", "destroy")
        self.destroyed.append((public_id, resource_type))
        return True


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_media():
    return FakeMedia()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_media):
    """FastAPI test client with DB and media dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_media():
        yield fake_media

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_service] = override_media
    app.dependency_overrides[get_optional_media_service] = override_media

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _make_user(db, email: str, role: UserRole, active: bool = True) -> User:
    user = User(
        username=email.split("@")[0],
        email=email,
        password_hash=hash_password(ADMIN_PASSWORD),
        role=role.value,
        is_active=active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def _bearer(user: User) -> dict:
    token = create_token(str(user.id), user.role, TokenType.ACCESS, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(test_db):
    return await _make_user(test_db, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
async def editor_user(test_db):
    return await _make_user(test_db, "editor@example.com", UserRole.EDITOR)


@pytest.fixture
def admin_headers(admin_user):
    return _bearer(admin_user)


@pytest.fixture
def editor_headers(editor_user):
    return _bearer(editor_user)


@pytest.fixture
def make_user(test_db):
    async def factory(email, role=UserRole.EDITOR, active=True):
        return await _make_user(test_db, email, role, active)
    return factory


@pytest.fixture
def bearer():
    return _bearer
