from contextlib import contextmanager
from sqlalchemy.orm import Session


@contextmanager
def transaction(db: Session):
    """
    트랜잭션 컨텍스트 매니저

    사용 예시:
        with transaction(self.db):
            registration = self.repos.registration.create(...)
            self.repos.counter.increment(Event, Event.attendees_count, event_id)
            # 예외 발생 시 둘 다 rollback, 정상 종료 시 함께 commit

    규칙:
        - 정상 종료 시 commit() 실행
        - 예외 발생 시 rollback() 후 예외 재발생
        - Repository는 flush까지만, commit은 여기서만
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
