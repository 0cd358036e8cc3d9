from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.storage import StorageBucket


class StorageBucketRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_name(self, name: str) -> StorageBucket | None:
        stmt = select(StorageBucket).where(StorageBucket.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_all(self) -> List[StorageBucket]:
        stmt = select(StorageBucket).order_by(StorageBucket.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create_bucket(self, bucket: StorageBucket) -> StorageBucket:
        self.db.add(bucket)
        self.db.flush()
        return bucket
