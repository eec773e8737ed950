# tests/conftest.py
import io
import json
from wsgiref.util import setup_testing_defaults

import pytest

from orchestrator.app import create_app
from orchestrator.database.database import build_engine, build_session_factory
from orchestrator.database.db_init import initialize_db


@pytest.fixture
def engine():
    """테이블이 생성된 인메모리 SQLite 엔진 (외래 키 검사 활성화)."""
    db_engine = build_engine("sqlite://")
    initialize_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


class WsgiClient:
    """WSGI 애플리케이션을 직접 호출하는 최소한의 테스트 클라이언트."""

    def __init__(self, application):
        self.application = application

    def request(self, method, path, body=None, raw=None):
        payload = raw if raw is not None else (json.dumps(body).encode("utf-8") if body is not None else b"")
        environ = {}
        setup_testing_defaults(environ)
        environ.update({
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "CONTENT_LENGTH": str(len(payload)),
            "CONTENT_TYPE": "application/json",
            "wsgi.input": io.BytesIO(payload),
        })

        captured = {}
        def start_response(status, headers):
            captured["status"] = int(status.split(" ", 1)[0])
            captured["headers"] = dict(headers)

        text = b"".join(self.application(environ, start_response)).decode("utf-8")
        return captured["status"], captured["headers"], text

    def json(self, method, path, body=None, raw=None):
        status, _, text = self.request(method, path, body, raw)
        return status, json.loads(text)


@pytest.fixture
def client(session_factory):
    return WsgiClient(create_app(session_factory))


@pytest.fixture
def make_client():
    """임의의 세션 팩토리로 클라이언트를 만듭니다 (저장소 장애 시뮬레이션용)."""
    return lambda factory: WsgiClient(create_app(factory))
