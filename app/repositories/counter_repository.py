from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session, InstrumentedAttribute


class CounterRepository:
    """
    정수 카운터 컬럼(attendees_count, view_count 등)을 단일 UPDATE로 증감
    - SET col = col + 1 형태라 동시 요청에서도 갱신 손실이 없음
    - commit은 Service에서 수행
    """

    def __init__(self, db: Session):
        self.db = db

    def increment(self, model, column: InstrumentedAttribute, row_id: UUID, amount: int = 1) -> int:
        """카운터 증가, 갱신된 행 수 반환 (0이면 행 없음)"""
        stmt = (
            update(model)
            .where(model.id == row_id)
            .values({column.key: column + amount})
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self._expire(model, row_id, column)
        return result.rowcount or 0

    def decrement(self, model, column: InstrumentedAttribute, row_id: UUID, amount: int = 1) -> int:
        """카운터 감소, 0 미만으로 내려가지 않음 (이미 0이면 0 반환)"""
        stmt = (
            update(model)
            .where(model.id == row_id, column >= amount)
            .values({column.key: column - amount})
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self._expire(model, row_id, column)
        return result.rowcount or 0

    def _expire(self, model, row_id: UUID, column: InstrumentedAttribute) -> None:
        # 세션에 로드된 객체가 있으면 다음 접근 시 DB 값을 다시 읽도록
        instance = self.db.identity_map.get(self.db.identity_key(model, row_id))
        if instance is not None:
            self.db.expire(instance, [column.key])
