"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Service-layer errors are pre-configured HTTPException subclasses so that
each kind (validation, authorization, not-found, generic service failure)
stays distinguishable to callers and already carries a default status code.
PersistenceError belongs to the repository layer and is never raised past
a service boundary.

Usage:
    from app.utils.exceptions import NotFoundError, ValidationError
    raise NotFoundError("Message not found")
    raise ValidationError("Password must be at least 4 characters long")
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """400 Bad Request 예외 — 도메인 규칙 위반 시 사용.

    Raised when input fails a domain rule (blank username, short password,
    duplicate username, empty or too long message text, missing owner account).

    Args:
        detail: 오류 메시지 (Error message, default: "Validation failed")
    """

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthorizationError(HTTPException):
    """403 Forbidden 예외 — 메시지 소유 계정이 아닐 때 사용.

    Raised when the acting account does not own the target message.

    Args:
        detail: 오류 메시지 (Error message, default: "Account not authorized")
    """

    def __init__(self, detail: str = "Account not authorized") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when an operation requires an entity that does not exist.
    Plain read lookups return None instead.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 로그인 실패 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid username or password")
    """

    def __init__(self, detail: str = "Invalid username or password") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ServiceError(HTTPException):
    """500 Internal Server Error 예외 — 영속성 계층 실패를 감싸서 전달.

    Wraps any underlying persistence failure. The detail is an opaque
    message; the original exception is chained as ``__cause__`` for logs.

    Args:
        detail: 오류 메시지 (Error message, default: "Error accessing the database")
    """

    def __init__(self, detail: str = "Error accessing the database") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class PersistenceError(Exception):
    """영속성 계층 예외 — SQL 실패, 연결 실패, 생성 키 누락.

    Generic persistence failure raised by repositories.
    """


class ConstraintViolationError(PersistenceError):
    """제약 조건 위반 — Unique or foreign key constraint rejected by the store."""
