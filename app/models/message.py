"""메시지 관련 SQLAlchemy ORM 모델 정의.

Message SQLAlchemy ORM model definition.

Tables:
    - messages: 계정이 작성한 텍스트 게시글 (Text posts attributed to one account)
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 메시지 본문 최대 길이 — Maximum message text length
MESSAGE_TEXT_MAX_LENGTH: int = 254


class Message(Base):
    """메시지 모델 — 하나의 계정에 귀속된 게시글.

    Message model — A text post attributed to exactly one account.

    Attributes:
        message_id: 서버가 부여하는 고유 식별자 (Server-assigned identifier)
        posted_by: 작성 계정 FK (Owning account foreign key)
        message_text: 본문 (Message text, 1..254 characters)
        time_posted_epoch: 작성 시각, 호출자 제공 (Caller-supplied epoch timestamp)
    """

    __tablename__ = "messages"

    # 메시지 고유 식별자 — Auto-increment primary key
    message_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 작성 계정 FK — Owning account (CASCADE: 계정 삭제 시 메시지도 삭제)
    posted_by: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False, index=True
    )
    message_text: Mapped[str] = mapped_column(String(MESSAGE_TEXT_MAX_LENGTH), nullable=False)
    time_posted_epoch: Mapped[int] = mapped_column(BigInteger, nullable=False)

    account = relationship("Account", back_populates="messages")

    def __repr__(self) -> str:
        return (
            f"Message(message_id={self.message_id!r}, posted_by={self.posted_by!r}, "
            f"message_text={self.message_text!r}, time_posted_epoch={self.time_posted_epoch!r})"
        )
