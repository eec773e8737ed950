import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.schema import CreateSchema

from .database import Base, build_engine
from . import models  # noqa: F401  모델을 Base.metadata에 등록

logger = logging.getLogger(__name__)


def initialize_db(engine: Engine, schema: str | None = None):
    """
    스키마, ENUM 타입, 테이블을 생성합니다. 이미 존재하는 객체는 건드리지 않습니다.

    Args:
        engine: build_engine으로 생성한 엔진.
        schema: 테이블을 생성할 스키마 이름 (SQLite에서는 무시).
    """
    logger.info("Initializing catalog tables on %s", engine.url.render_as_string(hide_password=True))

    with engine.begin() as conn:
        if schema and engine.dialect.name != "sqlite" and schema not in inspect(conn).get_schema_names():
            conn.execute(CreateSchema(schema))
        Base.metadata.create_all(bind=conn)

    logger.info("Catalog tables ready.")


if __name__ == "__main__":
    from orchestrator.config import Settings

    settings = Settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    db_engine = build_engine(settings.database_url, settings.db_pool_size, settings.db_schema)
    try:
        initialize_db(db_engine, settings.db_schema)
    finally:
        db_engine.dispose()
