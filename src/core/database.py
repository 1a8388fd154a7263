"""데이터베이스 연결 및 세션 관리"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from typing import Generator, Optional

from src.core.config import settings
from src.core.exceptions import CategoryStoreException
from src.core.logging import logger

# SQLAlchemy Base
Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """엔진을 lazy하게 생성 (database_url 미설정 시 예외)"""
    global _engine, _session_factory
    if _engine is not None:
        return _engine

    if not settings.database_url:
        raise CategoryStoreException("database_url is not configured")

    kwargs = {"pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(pool_recycle=300, pool_size=5, max_overflow=10)

    _engine = create_engine(settings.database_url, **kwargs)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def init_db() -> None:
    """데이터베이스 테이블 초기화"""
    from src.repositories import models  # noqa: F401  (테이블 등록)

    try:
        Base.metadata.create_all(bind=get_engine())
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Context Manager: DB 세션 제공"""
    get_engine()
    db = _session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def dispose_engine() -> None:
    """커넥션 풀 정리 (프로세스 종료 시)"""
    global _engine, _session_factory
    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    _session_factory = None
