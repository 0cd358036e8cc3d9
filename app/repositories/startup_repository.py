from typing import Any, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from app.models.networking import Startup


class StartupRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Startup]:
        stmt = select(Startup).order_by(Startup.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, startup_id: UUID, with_founder: bool = False) -> Startup | None:
        stmt = select(Startup).where(Startup.id == startup_id)
        if with_founder:
            stmt = stmt.options(joinedload(Startup.founder))
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def create_startup(self, startup: Startup) -> Startup:
        self.db.add(startup)
        self.db.flush()
        self.db.refresh(startup)
        return startup

    def update_startup(self, startup: Startup, changes: dict[str, Any]) -> Startup:
        for field, value in changes.items():
            setattr(startup, field, value)
        self.db.flush()
        self.db.refresh(startup)
        return startup

    def delete_startup(self, startup: Startup) -> None:
        self.db.delete(startup)
        self.db.flush()

    def count_all(self) -> int:
        return self.db.execute(select(func.count(Startup.id))).scalar_one()
