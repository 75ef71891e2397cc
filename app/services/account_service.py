"""계정 서비스 — 회원가입, 로그인, 계정 CRUD 비즈니스 로직.

Account Service — Business logic for registration, login, and account CRUD.
Enforces the account invariants (non-blank username, password of at least
four characters, unique username) and exposes existence checks used by the
message flows. Lookups return None for a missing account; only rule
violations and persistence failures raise.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account
from app.repositories.account_repository import AccountRepository, account_repository
from app.schemas.account import AccountCreate, AccountUpdate, LoginRequest
from app.services.base import BaseService
from app.utils.exceptions import ConstraintViolationError, ValidationError
from app.utils.password import fits_bcrypt, hash_password

# 비밀번호 최소 길이 (공백 제거 후) — Minimum password length after trimming
PASSWORD_MIN_LENGTH: int = 4


def validate_credentials(username: str | None, password: str | None) -> None:
    """계정 자격 증명 규칙을 검사합니다.

    Check the credential rules on trimmed values. Pure function.

    Args:
        username: 사용자명 (Username, may be None)
        password: 평문 비밀번호 (Plain text password, may be None)

    Raises:
        ValidationError: 빈 사용자명, 빈 비밀번호, 짧거나 너무 긴 비밀번호
                         (Blank username, empty, short or oversized password)
    """
    trimmed_username: str = (username or "").strip()
    trimmed_password: str = (password or "").strip()

    if not trimmed_username:
        raise ValidationError("Username cannot be blank")
    if not trimmed_password:
        raise ValidationError("Password cannot be empty")
    if len(trimmed_password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not fits_bcrypt(password or ""):
        raise ValidationError("Password is too long")


class AccountService(BaseService):
    """계정 관련 비즈니스 로직을 처리하는 서비스.

    Service handling account business logic. Stateless between calls: every
    operation re-reads from the repository before acting.
    """

    def __init__(
        self,
        repository: AccountRepository | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger or logging.getLogger(__name__))
        self.repository: AccountRepository = repository or account_repository

    async def get_account_by_id(self, db: AsyncSession, account_id: int) -> Account | None:
        """ID로 계정을 조회합니다. 없으면 None (오류 아님).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 ID (Account id)

        Returns:
            Account | None: 조회된 계정 또는 None (Found account or None)
        """
        self.logger.info("Fetching account with ID: %s", account_id)
        with self.persistence("Exception occurred while fetching account"):
            account: Account | None = await self.repository.get_by_id(db, account_id)
        self.logger.info("Fetched account: %s", account)
        return account

    async def get_all_accounts(self, db: AsyncSession) -> list[Account]:
        """모든 계정을 조회합니다."""
        self.logger.info("Fetching all accounts")
        with self.persistence("Exception occurred while fetching accounts"):
            accounts: list[Account] = await self.repository.get_all(db)
        self.logger.info("Fetched %d accounts", len(accounts))
        return accounts

    async def find_account_by_username(self, db: AsyncSession, username: str) -> Account | None:
        """사용자명으로 계정을 조회합니다 (정확히 일치).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 사용자명 (Exact, case-sensitive username)

        Returns:
            Account | None: 조회된 계정 또는 None (Found account or None)
        """
        self.logger.info("Finding account by username: %s", username)
        with self.persistence(f"Exception occurred while finding account by username {username}"):
            account: Account | None = await self.repository.find_by_username(db, username)
        self.logger.info("Found account: %s", account)
        return account

    async def validate_login(self, db: AsyncSession, credentials: LoginRequest) -> Account | None:
        """로그인 자격 증명을 확인합니다.

        Query for an account whose username and password both match exactly.
        A mismatch is a normal outcome and yields None.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            credentials: 로그인 요청 (Username and password)

        Returns:
            Account | None: 일치하는 계정 또는 None (Matching account or None)
        """
        self.logger.info("Validating login")
        with self.persistence("Exception occurred while validating login"):
            account: Account | None = await self.repository.validate_login(
                db, credentials.username or "", credentials.password or ""
            )
        self.logger.info("Login validation result: %s", account is not None)
        return account

    async def create_account(self, db: AsyncSession, data: AccountCreate) -> Account:
        """새 계정을 생성합니다.

        Create an account after checking the credential rules and, in order,
        a direct existence check and an explicit username lookup. The store's
        unique constraint backs both checks against a concurrent insert.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 데이터 (Registration data)

        Returns:
            Account: 생성된 계정, account_id 포함 (Created account with its id)

        Raises:
            ValidationError: 자격 증명 규칙 위반 또는 중복 사용자명
                             (Credential rule violation or duplicate username)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Creating account: %s", data.username)
        validate_credentials(data.username, data.password)
        username: str = data.username or ""
        password: str = data.password or ""

        with self.persistence("Exception occurred while validating account"):
            if await self.repository.does_username_exist(db, username):
                raise ValidationError("The username must be unique")

        if await self.find_account_by_username(db, username) is not None:
            raise ValidationError("Account already exist")

        with self.persistence("Exception occurred while creating account"):
            try:
                account: Account = await self.repository.insert(
                    db, Account(username=username, password=hash_password(password))
                )
            except ConstraintViolationError:
                # 동시 가입 경쟁 — Lost a race with a concurrent registration
                raise ValidationError("The username must be unique")
        self.logger.info("Created account: %s", account)
        return account

    async def update_account(self, db: AsyncSession, data: AccountUpdate) -> bool:
        """계정의 사용자명과 비밀번호를 수정합니다.

        Re-run the credential rules, reject a username held by another
        account, re-hash the password, and write both fields.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 수정 데이터 (Account id and new credentials)

        Returns:
            bool: 행이 변경되었으면 True (True iff a row was updated)

        Raises:
            ValidationError: 자격 증명 규칙 위반 또는 중복 사용자명
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Updating account: %s", data.account_id)
        validate_credentials(data.username, data.password)
        username: str = data.username or ""

        holder: Account | None = await self.find_account_by_username(db, username)
        if holder is not None and holder.account_id != data.account_id:
            raise ValidationError("The username must be unique")

        with self.persistence("Exception occurred while updating account"):
            try:
                updated: bool = await self.repository.update(
                    db,
                    Account(account_id=data.account_id),
                    {"username": username, "password": hash_password(data.password or "")},
                )
            except ConstraintViolationError:
                # 확인 이후 다른 계정이 사용자명을 선점 — Username taken after the holder check
                raise ValidationError("The username must be unique")
        self.logger.info("Updated account: %s. Update successful %s", data.account_id, updated)
        return updated

    async def delete_account(self, db: AsyncSession, account: Account) -> bool:
        """계정을 삭제합니다 (작성한 메시지도 함께 삭제).

        Delete the account and its messages.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account: 삭제할 계정 (Account to delete)

        Returns:
            bool: 실제로 행이 삭제되었는지 여부 (Whether a row was removed)

        Raises:
            ValueError: account_id가 비어 있을 때 (Unset or zero account id)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Deleting account: %s", account)
        if not account.account_id:
            raise ValueError("Account ID cannot be null")

        with self.persistence("Exception occurred while deleting account"):
            deleted: bool = await self.repository.delete(db, account)
        self.logger.info("Deleted account: %s. Deletion successful %s", account, deleted)
        return deleted

    async def account_exists(self, db: AsyncSession, account_id: int) -> bool:
        """계정 존재 여부를 확인합니다."""
        self.logger.info("Checking account existence with ID: %s", account_id)
        with self.persistence("Exception occurred while checking account existence"):
            exists: bool = await self.repository.get_by_id(db, account_id) is not None
        self.logger.info("Account existence: %s", exists)
        return exists


# 싱글턴 인스턴스 — Singleton instance
account_service: AccountService = AccountService()
