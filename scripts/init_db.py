"""
로컬 개발용 테이블 생성 스크립트
- 운영 DB는 alembic 마이그레이션 사용
- 사용: python -m scripts.init_db [--drop]
"""
import argparse
import logging

from dotenv import load_dotenv

load_dotenv()

from app.db import Base, engine  # noqa: E402
import app.models  # noqa: F401,E402

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create all tables for local development")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    if args.drop:
        Base.metadata.drop_all(bind=engine)
        logger.info("Dropped all tables")

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
