"""메시지 레포지토리 — 메시지 CRUD 및 계정별 조회.

Message Repository — CRUD and per-account listing for messages.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.message import Message
from app.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """메시지 레포지토리.

    Message repository with per-account listing.

    Extends:
        BaseRepository[Message]
    """

    def __init__(self) -> None:
        super().__init__(Message)

    async def list_by_account_id(
        self,
        db: AsyncSession,
        account_id: int,
    ) -> list[Message]:
        """계정이 작성한 메시지를 ID 순으로 조회합니다.

        Retrieve messages posted by an account, ordered by message id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 작성 계정 ID (Posting account id)

        Returns:
            list[Message]: 메시지 목록, 없으면 빈 목록 (Messages, possibly empty)
        """
        return list(await self.find_by(db, {"posted_by": account_id}))


# 싱글턴 인스턴스 — Singleton instance
message_repository: MessageRepository = MessageRepository()
