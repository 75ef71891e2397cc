"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for table creation and
relationship resolution.

Modules:
    account: 계정 (Account)
    message: 메시지 (Message)
"""

from app.models.account import Account
from app.models.message import Message

__all__ = [
    "Account",
    "Message",
]
