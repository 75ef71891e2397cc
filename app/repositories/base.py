"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic get/insert/update/delete operations keyed by the model's
integer primary key, and translates every SQLAlchemy failure into a
PersistenceError so that driver exceptions never leave this layer.

Usage:
    class MessageRepository(BaseRepository[Message]):
        def __init__(self) -> None:
            super().__init__(Message)
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, delete, func, inspect, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.database import Base
from app.utils.exceptions import ConstraintViolationError, PersistenceError

logger = logging.getLogger(__name__)

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def translate_errors(description: str) -> Iterator[None]:
    """SQLAlchemy 예외를 PersistenceError로 변환합니다.

    Log the failing operation and re-raise any SQLAlchemyError as
    PersistenceError, keeping the driver exception as ``__cause__``.

    Args:
        description: 실패 시 사용할 설명 (Human readable operation description)
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("%s: %s", description, exc)
        raise PersistenceError(description) from exc


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository over a model with a single integer primary key.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model
        self.name: str = model.__tablename__
        # 기본 키 속성 — account_id, message_id 등 (Primary key attribute)
        self.pk: InstrumentedAttribute = getattr(model, inspect(model).primary_key[0].key)

    def _id_of(self, obj: ModelType) -> Any:
        return getattr(obj, self.pk.key)

    async def get_by_id(self, db: AsyncSession, record_id: int) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (Primary key of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.pk == record_id)
        with translate_errors(f"Error while retrieving {self.name} with id: {record_id}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def get_all(self, db: AsyncSession) -> list[ModelType]:
        """모든 레코드를 기본 키 순서로 조회합니다.

        Retrieve all records ordered by primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[ModelType]: 레코드 목록 (All records)
        """
        query: Select = select(self.model).order_by(self.pk)
        with translate_errors(f"Error while retrieving all {self.name}"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def find_by(self, db: AsyncSession, filters: dict[str, Any]) -> Sequence[ModelType]:
        """컬럼 동등 조건으로 레코드를 조회합니다 (기본 키 순서).

        Retrieve records whose columns equal the given values, ordered by primary key.
        """
        query: Select = select(self.model)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)
        query = query.order_by(self.pk)

        with translate_errors(f"Error while filtering {self.name} by {sorted(filters)}"):
            result = await db.execute(query)
            return result.scalars().all()

    async def insert(self, db: AsyncSession, obj: ModelType) -> ModelType:
        """새 레코드를 저장하고 생성된 ID를 채워 반환합니다.

        Insert a new record; the store assigns its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj: 저장할 모델 인스턴스 (Transient model instance)

        Returns:
            ModelType: 생성된 ID가 채워진 레코드 (The persisted record)

        Raises:
            ConstraintViolationError: 유니크/외래 키 제약 위반 (Constraint rejected the row)
            PersistenceError: 그 밖의 DB 오류 또는 생성 키 누락
                              (Any other DB failure, or no generated key)
        """
        description: str = f"Error while inserting into {self.name}"
        with translate_errors(description):
            try:
                db.add(obj)
                await db.flush()
            except IntegrityError as exc:
                # 세션이 실패 상태이므로 롤백 — Session is unusable until rolled back
                await db.rollback()
                logger.warning("%s: %s", description, exc.orig)
                raise ConstraintViolationError(description) from exc
            await db.refresh(obj)

        if self._id_of(obj) is None:
            raise PersistenceError(f"Failed to insert into {self.name}, no ID obtained")
        return obj

    async def update(self, db: AsyncSession, obj: ModelType, values: dict[str, Any]) -> bool:
        """레코드를 업데이트합니다.

        Write ``values`` to the row identified by ``obj``'s primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj: 대상 레코드 (Record whose primary key selects the row)
            values: 업데이트할 컬럼과 값 (Columns and values to write)

        Returns:
            bool: 행이 변경되었으면 True (True iff a row was affected)

        Raises:
            ConstraintViolationError: 유니크/외래 키 제약 위반 (Constraint rejected the new values)
            PersistenceError: 그 밖의 DB 오류 (Any other DB failure)
        """
        record_id: Any = self._id_of(obj)
        stmt = (
            update(self.model)
            .where(self.pk == record_id)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        description: str = f"Error while updating {self.name} with id: {record_id}"
        with translate_errors(description):
            try:
                result = await db.execute(stmt)
            except IntegrityError as exc:
                await db.rollback()
                logger.warning("%s: %s", description, exc.orig)
                raise ConstraintViolationError(description) from exc
            return result.rowcount > 0

    async def delete(self, db: AsyncSession, obj: ModelType) -> bool:
        """레코드를 삭제합니다.

        Delete the row identified by ``obj``'s primary key.

        Returns:
            bool: 행이 삭제되었으면 True (True iff a row was removed)
        """
        record_id: Any = self._id_of(obj)
        stmt = (
            delete(self.model)
            .where(self.pk == record_id)
            .execution_options(synchronize_session="evaluate")
        )
        with translate_errors(f"Error while deleting {self.name} with id: {record_id}"):
            result = await db.execute(stmt)
            return result.rowcount > 0

    async def exists(self, db: AsyncSession, filters: dict[str, Any]) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)

        with translate_errors(f"Error while checking {self.name} existence"):
            count: int = (await db.execute(query)).scalar() or 0
        return count > 0
