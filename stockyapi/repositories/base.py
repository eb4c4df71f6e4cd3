from abc import ABC
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockyapi.core.exceptions import StorageError

T = TypeVar("T")
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository(Generic[T, SchemaType], ABC):
    """모든 리포지토리의 베이스 클래스 - Pydantic 응답 보장"""

    def __init__(
        self, model_class: Type[T], schema_class: Type[SchemaType], db: Session
    ):
        self.model_class = model_class
        self.schema_class = schema_class
        self.db = db

    def _to_schema(self, model_instance: Any) -> Optional[SchemaType]:
        """SQLAlchemy 모델을 Pydantic 스키마로 변환"""
        if model_instance is None:
            return None
        # Pydantic v2의 model_validate를 사용하여 from_attributes 활용
        return self.schema_class.model_validate(model_instance)

    def _to_schemas(self, model_instances: Sequence[Any]) -> List[SchemaType]:
        return [self._to_schema(instance) for instance in model_instances]  # type: ignore[misc]

    def _rollback_quietly(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            # 롤백 자체 실패는 원래 예외를 가리지 않도록 무시
            pass

    def _storage_error(self, action: str, error: Exception) -> StorageError:
        self._rollback_quietly()
        return StorageError(details={"action": action, "reason": type(error).__name__})

    def _upsert(
        self, conflict_column: str, values: Dict[str, Any], update_columns: Sequence[str]
    ) -> None:
        """단일 INSERT .. ON CONFLICT DO UPDATE (PostgreSQL/SQLite)"""
        dialect = self.db.get_bind().dialect.name
        insert_fn = postgresql.insert if dialect == "postgresql" else sqlite.insert

        stmt = insert_fn(self.model_class).values(**values)  # type: ignore[arg-type]
        stmt = stmt.on_conflict_do_update(
            index_elements=[conflict_column],
            set_={column: getattr(stmt.excluded, column) for column in update_columns},
        )
        self.db.execute(stmt)
        # 구문 단위 upsert는 identity map을 갱신하지 않음
        self.db.expire_all()

    def get_by_field(self, field_name: str, value: Any) -> Optional[SchemaType]:
        """특정 필드로 조회 - Pydantic 스키마 반환"""
        try:
            model_instance = (
                self.db.query(self.model_class)
                .filter(getattr(self.model_class, field_name) == value)
                .first()
            )
        except SQLAlchemyError as e:
            raise self._storage_error(f"get {field_name}", e) from e
        return self._to_schema(model_instance)
