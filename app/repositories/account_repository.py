"""계정 레포지토리 — 계정 CRUD 및 사용자명 조회.

Account Repository — CRUD and username lookups for accounts.
Extends BaseRepository with credential checks and a cascading delete
that removes the account's messages in the same transaction.
"""

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account
from app.models.message import Message
from app.repositories.base import BaseRepository, translate_errors
from app.utils.password import verify_password


class AccountRepository(BaseRepository[Account]):
    """계정 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the accounts table.
    """

    def __init__(self) -> None:
        super().__init__(Account)

    async def find_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Account | None:
        """사용자명으로 계정을 조회합니다 (대소문자 구분, 정확히 일치).

        Retrieve an account by exact, case-sensitive username.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 조회할 사용자명 (Username to look up)

        Returns:
            Account | None: 조회된 계정 또는 None (Found account or None)
        """
        query: Select = select(Account).where(Account.username == username)
        with translate_errors(f"Error while finding account by username: {username}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def does_username_exist(self, db: AsyncSession, username: str) -> bool:
        """사용자명이 이미 사용 중인지 확인합니다."""
        return await self.exists(db, {"username": username})

    async def validate_login(
        self,
        db: AsyncSession,
        username: str,
        password: str,
    ) -> Account | None:
        """사용자명과 비밀번호가 모두 일치하는 계정을 반환합니다.

        Return the account whose username matches exactly and whose stored
        bcrypt hash verifies ``password``; None otherwise.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 로그인 아이디 (Login username)
            password: 평문 비밀번호 (Plain text password)

        Returns:
            Account | None: 인증된 계정 또는 None (Matching account or None)
        """
        account: Account | None = await self.find_by_username(db, username)
        if account is None or not verify_password(password, account.password):
            return None
        return account

    async def delete(self, db: AsyncSession, obj: Account) -> bool:
        """계정과 그 계정의 메시지를 함께 삭제합니다.

        Delete the account and every message it posted.

        Returns:
            bool: 계정 행이 삭제되었으면 True (True iff the account row was removed)
        """
        # 메시지 먼저 삭제 — FK 강제 여부와 무관하게 동일한 결과 보장
        # Messages first, so the outcome does not depend on FK enforcement
        stmt = (
            delete(Message)
            .where(Message.posted_by == obj.account_id)
            .execution_options(synchronize_session="evaluate")
        )
        with translate_errors(f"Error while deleting messages of account with id: {obj.account_id}"):
            await db.execute(stmt)
        return await super().delete(db, obj)


# 싱글턴 인스턴스 — Singleton instance
account_repository: AccountRepository = AccountRepository()
