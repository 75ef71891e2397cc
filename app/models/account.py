"""계정 관련 SQLAlchemy ORM 모델 정의.

Account SQLAlchemy ORM model definition.

Tables:
    - accounts: 사용자 계정 (Registered accounts, globally unique username)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Account(Base):
    """계정 모델 — 등록된 사용자 계정 정보.

    Account model — A registered user identified by a unique username.
    Deletion is physical; the account's messages are removed with it.

    Attributes:
        account_id: 서버가 부여하는 고유 식별자 (Server-assigned identifier)
        username: 로그인 아이디 (Login username, unique across all accounts)
        password: bcrypt 해시된 비밀번호 (bcrypt-hashed password)

    Relationships:
        messages: 이 계정이 작성한 메시지 목록 (Messages posted by the account)
    """

    __tablename__ = "accounts"

    # 계정 고유 식별자 — Auto-increment primary key
    account_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 로그인 아이디 — Login username (전역 고유, globally unique)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    messages = relationship("Message", back_populates="account", passive_deletes=True)

    def __repr__(self) -> str:
        return f"Account(account_id={self.account_id!r}, username={self.username!r})"
