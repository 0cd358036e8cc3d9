from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy import create_engine
from os import getenv
from typing import Generator

class Base(DeclarativeBase):
    pass

# 로컬 개발 기본값은 SQLite 파일, 운영은 PostgreSQL URL 사용
DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./startup_club.db")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator:
    """FastAPI 의존성으로 사용할 DB 세션"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
