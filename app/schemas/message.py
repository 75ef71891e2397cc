"""메시지 관련 Pydantic 요청/응답 스키마 정의.

Message-related Pydantic request/response schema definitions.
"""

from pydantic import BaseModel


class MessageCreate(BaseModel):
    """메시지 작성 요청 스키마.

    Message creation request schema.

    Attributes:
        posted_by: 작성 계정 ID (Posting account id, must exist)
        message_text: 본문 (Message text, 1..254 characters after trimming)
        time_posted_epoch: 작성 시각 (Caller-supplied epoch timestamp, not revalidated)
    """

    posted_by: int | None = None  # 누락 시 계정 없음으로 400 처리 (Missing owner fails service rules)
    message_text: str | None = None  # 누락/null은 서비스 규칙에서 400 처리 (Missing text fails service rules)
    time_posted_epoch: int = 0


class MessageUpdate(BaseModel):
    """메시지 수정 요청 스키마 (부분 업데이트).

    Message patch schema. Only ``message_text`` is applied; ``message_id``
    is filled from the URL path by the route.
    """

    message_id: int = 0
    message_text: str | None = None


class MessageResponse(BaseModel):
    """메시지 응답 스키마.

    Message response schema, built from the ORM entity.
    """

    message_id: int
    posted_by: int
    message_text: str
    time_posted_epoch: int

    model_config = {"from_attributes": True}
