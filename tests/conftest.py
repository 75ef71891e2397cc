"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh in-memory database (aiosqlite over a StaticPool, so
every connection sees the same memory database) with the schema created
from the ORM metadata. Foreign keys are enforced through a PRAGMA.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Account, Message
from app.utils.password import hash_password

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# 공통 테스트 자격 증명 — Shared test credentials
TEST_PASSWORD = "password"


def _enable_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 새 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(eng.sync_engine, "connect", _enable_foreign_keys)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_account(db: AsyncSession, username: str, password: str = TEST_PASSWORD) -> Account:
    """해시된 비밀번호로 계정을 저장하고 커밋합니다."""
    account = Account(username=username, password=hash_password(password))
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account


async def make_message(
    db: AsyncSession,
    account: Account,
    text: str = "I am here!",
    epoch: int = 1669947792,
) -> Message:
    """메시지를 저장하고 커밋합니다."""
    message = Message(posted_by=account.account_id, message_text=text, time_posted_epoch=epoch)
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> Account:
    """테스트 계정 alice를 생성합니다."""
    return await make_account(db, "alice")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> Account:
    """테스트 계정 bob을 생성합니다."""
    return await make_account(db, "bob")


@pytest_asyncio.fixture
async def alice_message(db: AsyncSession, alice: Account) -> Message:
    """alice가 작성한 메시지를 생성합니다."""
    return await make_message(db, alice)
