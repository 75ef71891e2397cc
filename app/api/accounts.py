"""계정 라우터 — 회원가입, 로그인, 계정별 메시지 조회.

Account Router — Registration, login, and per-account message listing.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.account import Account
from app.models.message import Message
from app.schemas.account import AccountCreate, AccountResponse, LoginRequest
from app.schemas.message import MessageResponse
from app.services.account_service import account_service
from app.services.message_service import message_service
from app.utils.exceptions import UnauthorizedError

router: APIRouter = APIRouter()


@router.post("/register", response_model=AccountResponse)
async def register(
    data: AccountCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountResponse:
    """회원가입 — 새 계정 생성.

    Register a new account. Rule violations and duplicate usernames
    return 400.
    """
    account: Account = await account_service.create_account(db, data)
    await db.commit()
    return AccountResponse.model_validate(account)


@router.post("/login", response_model=AccountResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountResponse:
    """로그인 — 사용자명/비밀번호 확인.

    Log in with username and password; a mismatch returns 401.
    """
    account: Account | None = await account_service.validate_login(db, data)
    if account is None:
        raise UnauthorizedError()
    return AccountResponse.model_validate(account)


@router.get("/accounts/{account_id}/messages", response_model=list[MessageResponse])
async def list_account_messages(
    account_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MessageResponse]:
    """계정이 작성한 메시지 목록 (없으면 빈 목록)."""
    messages: list[Message] = await message_service.get_messages_by_account_id(db, account_id)
    return [MessageResponse.model_validate(m) for m in messages]
