"""서비스 공통 기반 — 로거 주입 및 영속성 예외 변환.

Service base — Logger injection and persistence error translation.
Every service receives its logger through the constructor and wraps each
repository call so that a PersistenceError is logged with its full cause
and re-raised as an opaque ServiceError.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from app.utils.exceptions import PersistenceError, ServiceError


class BaseService:
    """로거와 영속성 예외 변환을 제공하는 서비스 베이스 클래스.

    Attributes:
        logger: 서비스 로거 (Logger injected at construction)
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger: logging.Logger = logger

    @contextmanager
    def persistence(self, description: str) -> Iterator[None]:
        """레포지토리 호출을 감싸 PersistenceError를 ServiceError로 변환합니다.

        Wrap repository calls; a PersistenceError is logged with traceback and
        re-raised as ServiceError(description), chained to the original.
        Service errors raised inside the block pass through unchanged.

        Args:
            description: 호출자에게 노출할 메시지 (Opaque message surfaced to callers)
        """
        try:
            yield
        except PersistenceError as exc:
            self.logger.exception("%s: %s", description, exc)
            raise ServiceError(description) from exc
