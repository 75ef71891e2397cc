"""메시지 라우터 — 메시지 작성, 조회, 수정, 삭제.

Message Router — Create, read, update, and delete messages.

Status mapping follows the public API contract rather than the raw
exception status: a missing message on GET/DELETE is an empty 200, and a
missing message on PATCH is a 400.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.account import Account
from app.models.message import Message
from app.schemas.message import MessageCreate, MessageResponse, MessageUpdate
from app.services.account_service import account_service
from app.services.message_service import message_service
from app.utils.exceptions import NotFoundError, ValidationError

router: APIRouter = APIRouter(prefix="/messages")


@router.post("", response_model=MessageResponse)
async def create_message(
    data: MessageCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """메시지 작성.

    Create a message for the account named by ``posted_by``.
    Missing account or bad text returns 400; a mismatched owner returns 403.
    """
    owner: Account | None = None
    if data.posted_by is not None:
        owner = await account_service.get_account_by_id(db, data.posted_by)
    message: Message = await message_service.create_message(db, data, owner)
    await db.commit()
    return MessageResponse.model_validate(message)


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MessageResponse]:
    """전체 메시지 목록."""
    messages: list[Message] = await message_service.get_all_messages(db)
    return [MessageResponse.model_validate(m) for m in messages]


@router.get("/{message_id}", response_model=None)
async def get_message(
    message_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse | Response:
    """메시지 단건 조회 — 없으면 빈 200 응답."""
    try:
        message: Message = await message_service.get_message_by_id(db, message_id)
    except NotFoundError:
        return Response(status_code=200)
    return MessageResponse.model_validate(message)


@router.delete("/{message_id}", response_model=None)
async def delete_message(
    message_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse | Response:
    """메시지 삭제.

    Delete a message and return it as it was before deletion. Deleting a
    missing message is idempotent: an empty 200.
    """
    try:
        message: Message = await message_service.get_message_by_id(db, message_id)
        deleted: MessageResponse = MessageResponse.model_validate(message)
        await message_service.delete_message(db, message)
    except NotFoundError:
        return Response(status_code=200)
    await db.commit()
    return deleted


@router.patch("/{message_id}", response_model=MessageResponse)
async def update_message(
    message_id: int,
    data: MessageUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """메시지 본문 수정 — message_id는 경로 값을 사용.

    Patch the text of a message. A missing message or bad text returns 400.
    """
    patch: MessageUpdate = data.model_copy(update={"message_id": message_id})
    try:
        message: Message = await message_service.update_message(db, patch)
    except NotFoundError as exc:
        raise ValidationError(exc.detail) from exc
    await db.commit()
    return MessageResponse.model_validate(message)
