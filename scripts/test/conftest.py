"""
pytest 공통 fixture

- 인메모리 SQLite (StaticPool: 모든 세션이 같은 연결 공유)
- get_db 의존성을 테스트 DB 세션으로 교체
- 업로드 파일은 tmp_path 아래에 저장
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-startup-club-api-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PUBLIC_BASE_URL", "http://testserver")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# 라우터 -> 의존성 -> 서비스 순으로 import 되도록 main을 먼저 불러옴
from main import app as api_app  # noqa: E402
from app.db import Base, get_db  # noqa: E402
from app import models  # noqa: F401,E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """테스트 코드에서 직접 쓰는 세션 (데이터 준비/검증용)"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage_root(tmp_path, monkeypatch):
    root = tmp_path / "storage"
    monkeypatch.setenv("STORAGE_ROOT", str(root))
    return root


@pytest.fixture
def client(session_factory, storage_root):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    api_app.dependency_overrides[get_db] = override_get_db
    with TestClient(api_app) as test_client:
        yield test_client
    api_app.dependency_overrides.clear()
