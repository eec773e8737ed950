from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 외래 키 검사를 켜야 합니다.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, pool_size: int = 16, schema: str | None = None) -> Engine:
    """
    연결 문자열로부터 SQLAlchemy 엔진(커넥션 풀)을 생성합니다.

    PostgreSQL 등 서버형 DB에서는 최대 pool_size개의 연결만 허용하며(overflow 없음),
    풀이 가득 차면 새 요청은 빈 연결이 생길 때까지 대기합니다.
    schema가 주어지면 스키마가 지정되지 않은 모든 테이블/타입이 해당 스키마로 매핑됩니다.
    SQLite에서는 스키마를 무시하고 외래 키 검사를 활성화합니다.

    Args:
        database_url: SQLAlchemy 연결 문자열.
        pool_size: 동시에 사용할 수 있는 최대 연결 수.
        schema: 테이블이 위치한 스키마 이름.

    Returns:
        설정이 적용된 Engine 객체.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        options = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # 인메모리 DB는 하나의 연결을 공유해야 모든 세션이 같은 데이터를 봅니다.
            options["poolclass"] = StaticPool
        engine = create_engine(url, **options)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    engine = create_engine(url, pool_size=pool_size, max_overflow=0)
    if schema:
        engine = engine.execution_options(schema_translate_map={None: schema})
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """요청마다 하나의 세션을 만들기 위한 세션 팩토리를 생성합니다. commit은 명시적으로 호출해야 합니다."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
