"""레포지토리 테스트.

Repository tests — Generic CRUD behavior, constraint translation, and the
account delete that removes the account's messages.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Account, Message
from app.repositories.account_repository import account_repository
from app.repositories.message_repository import message_repository
from app.utils.exceptions import ConstraintViolationError, PersistenceError
from app.utils.password import hash_password
from tests.conftest import TEST_PASSWORD, make_message


class TestBaseRepository:
    """공통 CRUD 테스트."""

    async def test_insert_assigns_id(self, db: AsyncSession):
        """저장 시 ID가 부여됨."""
        account = await account_repository.insert(
            db, Account(username="ann", password=hash_password("pass1"))
        )
        assert account.account_id is not None
        assert await account_repository.get_by_id(db, account.account_id) is account

    async def test_insert_duplicate_username(self, db: AsyncSession, alice: Account):
        """유니크 제약 위반은 ConstraintViolationError."""
        with pytest.raises(ConstraintViolationError) as exc_info:
            await account_repository.insert(db, Account(username="alice", password="x"))
        assert isinstance(exc_info.value, PersistenceError)
        assert exc_info.value.__cause__ is not None

    async def test_insert_unknown_owner(self, db: AsyncSession):
        """외래 키 위반은 ConstraintViolationError."""
        with pytest.raises(ConstraintViolationError):
            await message_repository.insert(
                db, Message(posted_by=4242, message_text="hi", time_posted_epoch=0)
            )

    async def test_update_duplicate_username(self, db: AsyncSession, alice: Account, bob: Account):
        """업데이트 시 유니크 제약 위반도 ConstraintViolationError, 세션은 계속 사용 가능."""
        bob_id = bob.account_id
        with pytest.raises(ConstraintViolationError):
            await account_repository.update(db, Account(account_id=bob_id), {"username": "alice"})
        reloaded = await account_repository.get_by_id(db, bob_id)
        assert reloaded is not None
        assert reloaded.username == "bob"

    async def test_update_reports_affected_rows(self, db: AsyncSession, alice_message: Message):
        """업데이트는 변경 여부를 반환."""
        assert await message_repository.update(db, alice_message, {"message_text": "edited"})
        assert alice_message.message_text == "edited"
        assert not await message_repository.update(
            db, Message(message_id=9999), {"message_text": "edited"}
        )

    async def test_delete_reports_affected_rows(self, db: AsyncSession, alice_message: Message):
        """삭제는 삭제 여부를 반환."""
        message_id = alice_message.message_id
        assert await message_repository.delete(db, alice_message)
        assert await message_repository.get_by_id(db, message_id) is None
        assert not await message_repository.delete(db, Message(message_id=message_id))


class TestAccountRepository:
    """계정 레포지토리 테스트."""

    async def test_username_lookups(self, db: AsyncSession, alice: Account):
        """사용자명 조회 및 존재 확인."""
        assert (await account_repository.find_by_username(db, "alice")) is alice
        assert await account_repository.does_username_exist(db, "alice")
        assert not await account_repository.does_username_exist(db, "alice ")

    async def test_validate_login(self, db: AsyncSession, alice: Account):
        """저장된 해시로 비밀번호 검증."""
        assert await account_repository.validate_login(db, "alice", TEST_PASSWORD) is alice
        assert await account_repository.validate_login(db, "alice", "nope") is None

    async def test_delete_removes_messages(self, db: AsyncSession, alice: Account, bob: Account):
        """계정 삭제 시 메시지도 삭제."""
        await make_message(db, alice, "one")
        kept = await make_message(db, bob, "two")
        alice_id = alice.account_id

        assert await account_repository.delete(db, alice)
        assert await message_repository.list_by_account_id(db, alice_id) == []
        assert [m.message_id for m in await message_repository.get_all(db)] == [kept.message_id]


class TestMessageRepository:
    """메시지 레포지토리 테스트."""

    async def test_list_by_account_id(self, db: AsyncSession, alice: Account, bob: Account):
        """작성자별 메시지 목록 (ID 순서)."""
        first = await make_message(db, alice, "first")
        await make_message(db, bob, "other")
        second = await make_message(db, alice, "second")
        messages = await message_repository.list_by_account_id(db, alice.account_id)
        assert [m.message_id for m in messages] == [first.message_id, second.message_id]
