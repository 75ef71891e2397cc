"""메시지 서비스 — 메시지 작성, 조회, 수정, 삭제 비즈니스 로직.

Message Service — Business logic for creating, reading, updating and
deleting messages. Enforces the text rules (non-blank, at most 254
characters) and the rule that a message may only be created for the
account that posts it. Every rule is checked before any write is issued.

Unlike account lookups, fetching a single message raises NotFoundError
when it does not exist; update and delete depend on that to short-circuit.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account
from app.models.message import MESSAGE_TEXT_MAX_LENGTH, Message
from app.repositories.message_repository import MessageRepository, message_repository
from app.schemas.message import MessageCreate, MessageUpdate
from app.services.base import BaseService
from app.utils.exceptions import (
    AuthorizationError,
    ConstraintViolationError,
    NotFoundError,
    ValidationError,
)

DB_ACCESS_ERROR_MSG: str = "Error accessing the database"


def validate_message_text(message_text: str | None) -> None:
    """메시지 본문 규칙을 검사합니다.

    Raises:
        ValidationError: 비어 있거나 254자를 넘을 때 (Blank, or longer than 254 characters)
    """
    if message_text is None or not message_text.strip():
        raise ValidationError("Message text cannot be null or empty")
    # 저장 컬럼 길이와 동일하게 원문 길이로 검사 — Raw length, matching the column size
    if len(message_text) > MESSAGE_TEXT_MAX_LENGTH:
        raise ValidationError(f"Message text cannot exceed {MESSAGE_TEXT_MAX_LENGTH} characters")


def check_account_permission(account: Account, posted_by: int | None) -> None:
    """작성 계정과 요청 계정이 같은지 확인합니다.

    Raises:
        AuthorizationError: account_id != posted_by
    """
    if account.account_id != posted_by:
        raise AuthorizationError("Account not authorized to modify this message")


class MessageService(BaseService):
    """메시지 관련 비즈니스 로직을 처리하는 서비스.

    Service handling message business logic.
    """

    def __init__(
        self,
        repository: MessageRepository | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger or logging.getLogger(__name__))
        self.repository: MessageRepository = repository or message_repository

    async def get_message_by_id(self, db: AsyncSession, message_id: int) -> Message:
        """ID로 메시지를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            message_id: 메시지 ID (Message id)

        Returns:
            Message: 조회된 메시지 (Found message)

        Raises:
            NotFoundError: 메시지가 없을 때 (Message does not exist)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Fetching message with ID: %s", message_id)
        with self.persistence(DB_ACCESS_ERROR_MSG):
            message: Message | None = await self.repository.get_by_id(db, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        self.logger.info("Fetched message: %s", message)
        return message

    async def get_all_messages(self, db: AsyncSession) -> list[Message]:
        """모든 메시지를 조회합니다."""
        self.logger.info("Fetching all messages")
        with self.persistence(DB_ACCESS_ERROR_MSG):
            messages: list[Message] = await self.repository.get_all(db)
        self.logger.info("Fetched %d messages", len(messages))
        return messages

    async def get_messages_by_account_id(self, db: AsyncSession, account_id: int) -> list[Message]:
        """계정이 작성한 메시지 목록을 조회합니다. 빈 목록은 오류가 아닙니다."""
        self.logger.info("Fetching messages posted by ID account: %s", account_id)
        with self.persistence(DB_ACCESS_ERROR_MSG):
            messages: list[Message] = await self.repository.list_by_account_id(db, account_id)
        self.logger.info("Fetched %d messages", len(messages))
        return messages

    async def create_message(
        self,
        db: AsyncSession,
        data: MessageCreate,
        owner: Account | None,
    ) -> Message:
        """새 메시지를 작성합니다.

        Create a message after checking, in order: the owning account exists,
        the text rules, and that the owner is the posting account.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 메시지 작성 데이터 (Message creation data)
            owner: posted_by로 조회한 계정, 없으면 None
                   (Account resolved from posted_by, or None)

        Returns:
            Message: 저장된 메시지, message_id 포함 (Persisted message with its id)

        Raises:
            ValidationError: 계정 없음 또는 본문 규칙 위반 (Missing account or bad text)
            AuthorizationError: 작성 계정 불일치 (Owner is not the posting account)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Creating message: %s", data)

        if owner is None:
            raise ValidationError("Account must exist when posting a new message")

        validate_message_text(data.message_text)

        self.logger.info("Checking account permissions for messages")
        check_account_permission(owner, data.posted_by)

        with self.persistence(DB_ACCESS_ERROR_MSG):
            try:
                message: Message = await self.repository.insert(
                    db,
                    Message(
                        posted_by=data.posted_by,
                        message_text=data.message_text,
                        time_posted_epoch=data.time_posted_epoch,
                    ),
                )
            except ConstraintViolationError:
                # 작성 도중 계정이 삭제됨 — Owner was deleted concurrently
                raise ValidationError("Account must exist when posting a new message")
        self.logger.info("Created message: %s", message)
        return message

    async def update_message(self, db: AsyncSession, patch: MessageUpdate) -> Message:
        """메시지 본문만 수정합니다 (부분 업데이트).

        Fetch the stored message, apply only ``message_text`` from the patch,
        and persist. posted_by and time_posted_epoch always come from the
        stored row. The patch text is validated before the stored entity is
        touched.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            patch: 수정 데이터 (message_id and new message_text)

        Returns:
            Message: 수정된 메시지, 재조회 없이 반환 (The mutated fetched entity)

        Raises:
            NotFoundError: 메시지가 없을 때 (Message does not exist)
            ValidationError: 본문 규칙 위반 (Bad text)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Updating message: %s", patch.message_id)

        message: Message = await self.get_message_by_id(db, patch.message_id)
        validate_message_text(patch.message_text)

        with self.persistence(DB_ACCESS_ERROR_MSG):
            updated: bool = await self.repository.update(
                db, message, {"message_text": patch.message_text}
            )
        if not updated:
            # 조회 이후 다른 요청이 삭제함 — Removed by another request after the fetch
            raise NotFoundError("Message not found")

        message.message_text = patch.message_text
        self.logger.info("Updated message: %s", message)
        return message

    async def delete_message(self, db: AsyncSession, message: Message) -> None:
        """메시지를 삭제합니다.

        Raises:
            NotFoundError: 삭제된 행이 없을 때 (No row was removed)
            ServiceError: 영속성 계층 실패 (Persistence failure)
        """
        self.logger.info("Deleting message: %s", message)
        with self.persistence(DB_ACCESS_ERROR_MSG):
            deleted: bool = await self.repository.delete(db, message)
        if not deleted:
            raise NotFoundError("Message to delete not found")
        self.logger.info("Deleted message %s", message)


# 싱글턴 인스턴스 — Singleton instance
message_service: MessageService = MessageService()
