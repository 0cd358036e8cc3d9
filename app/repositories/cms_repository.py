from typing import Any, List, Type
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.cms import ForumCategory, ImportantMember, SlideImage, Sponsor, SystemConfig


class DisplayOrderRepository:
    """display_order 로 정렬되는 CMS 항목 공통 Repository"""

    model: Type[Any]

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, active_only: bool = False) -> List[Any]:
        stmt = select(self.model)
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))
        stmt = stmt.order_by(self.model.display_order.asc(), self.model.created_at.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, item_id: UUID) -> Any | None:
        stmt = select(self.model).where(self.model.id == item_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_ids(self, item_ids: List[UUID]) -> dict[UUID, Any]:
        stmt = select(self.model).where(self.model.id.in_(item_ids))
        return {item.id: item for item in self.db.execute(stmt).scalars().all()}

    def next_display_order(self) -> int:
        """현재 최대 display_order + 1 (비어 있으면 1)"""
        stmt = select(func.max(self.model.display_order))
        current = self.db.execute(stmt).scalar_one_or_none()
        return (current or 0) + 1

    def create(self, item: Any) -> Any:
        self.db.add(item)
        self.db.flush()
        self.db.refresh(item)
        return item

    def update(self, item: Any, changes: dict[str, Any]) -> Any:
        for field, value in changes.items():
            setattr(item, field, value)
        self.db.flush()
        self.db.refresh(item)
        return item

    def delete(self, item: Any) -> None:
        self.db.delete(item)
        self.db.flush()


class SlideRepository(DisplayOrderRepository):
    model = SlideImage


class SponsorRepository(DisplayOrderRepository):
    model = Sponsor


class ImportantMemberRepository(DisplayOrderRepository):
    model = ImportantMember


class ForumCategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[ForumCategory]:
        stmt = select(ForumCategory).order_by(ForumCategory.order_num.asc(), ForumCategory.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, category_id: UUID) -> ForumCategory | None:
        stmt = select(ForumCategory).where(ForumCategory.id == category_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_category(self, category: ForumCategory) -> ForumCategory:
        self.db.add(category)
        self.db.flush()
        self.db.refresh(category)
        return category

    def update_category(self, category: ForumCategory, changes: dict[str, Any]) -> ForumCategory:
        for field, value in changes.items():
            setattr(category, field, value)
        self.db.flush()
        self.db.refresh(category)
        return category

    def delete_category(self, category: ForumCategory) -> None:
        self.db.delete(category)
        self.db.flush()


class SystemConfigRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self) -> SystemConfig | None:
        stmt = select(SystemConfig).where(SystemConfig.id == 1)
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, config: SystemConfig) -> SystemConfig:
        self.db.add(config)
        self.db.flush()
        self.db.refresh(config)
        return config

    def update(self, config: SystemConfig, changes: dict[str, Any]) -> SystemConfig:
        for field, value in changes.items():
            setattr(config, field, value)
        self.db.flush()
        self.db.refresh(config)
        return config
