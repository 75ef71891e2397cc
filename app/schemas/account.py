"""계정 관련 Pydantic 요청/응답 스키마 정의.

Account-related Pydantic request/response schema definitions.
Covers registration, login, and account responses. Credentials are
optional at the schema level so that blank or missing values reach the
service rules (400) rather than schema validation (422).
"""

from pydantic import BaseModel


class AccountCreate(BaseModel):
    """회원가입 요청 스키마.

    Registration request schema.

    Attributes:
        username: 사용자 아이디 (Desired login username, unique)
        password: 비밀번호 (Plain text, at least 4 characters after trimming)
    """

    username: str | None = None  # 사용자 아이디 — 전역 고유 (Login ID, globally unique)
    password: str | None = None  # 비밀번호 — 평문, 서버에서 bcrypt 해싱 (Plain text, server hashes with bcrypt)


class AccountUpdate(BaseModel):
    """계정 수정 요청 스키마.

    Account update schema; both credential fields are written.
    """

    account_id: int
    username: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema; both fields must match a stored account exactly.
    """

    username: str | None = None  # 사용자 로그인 아이디 (User login identifier)
    password: str | None = None  # 비밀번호 — 평문, 저장된 bcrypt 해시와 비교 (Compared to bcrypt hash)


class AccountResponse(BaseModel):
    """계정 응답 스키마.

    Account response schema. The password hash is never serialized.

    Attributes:
        account_id: 계정 ID (Account identifier)
        username: 로그인 아이디 (Login username)
    """

    account_id: int
    username: str

    model_config = {"from_attributes": True}
