# orchestrator/app.py
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIServer, make_server
import json
import logging
import re

from sqlalchemy.orm import sessionmaker

from orchestrator.config import Settings
from orchestrator.database.database import build_engine, build_session_factory
from orchestrator.repositories.sqlalchemy import SqlalchemyBotRepository, SqlalchemyVirtualMachineRepository
from orchestrator.services.bot_service import BotService
from orchestrator.services.virtual_machine_service import VirtualMachineService
from orchestrator.services.exceptions import (
    BotNotFoundError,
    ConstraintViolationError,
    InvalidPayloadError,
    PersistenceError,
    VirtualMachineNotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    200: "200 OK",
    201: "201 Created",
    400: "400 Bad Request",
    404: "404 Not Found",
    405: "405 Method Not Allowed",
    409: "409 Conflict",
    500: "500 Internal Server Error",
}

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        raw = environ["wsgi.input"].read(content_length) if content_length > 0 else b""
        return json.loads(raw) if raw else None
    except ValueError as e:
        raise InvalidPayloadError(f"Invalid JSON body: {e}") from e

def envelope(success, data=None, message=None):
    # 기존 클라이언트와의 호환을 위해 'sucess' 철자를 그대로 유지합니다.
    body = {"sucess": success}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return json.dumps(body)

def handle_exception(e):
    error_map = [
        (InvalidPayloadError, 400),
        (VirtualMachineNotFoundError, 404),
        (BotNotFoundError, 404),
        (ConstraintViolationError, 409),
        (PersistenceError, 500),
    ]
    for error_type, status in error_map:
        if isinstance(e, error_type):
            return status, envelope(False, message=str(e))
    logger.exception("Unhandled error while processing request")
    return 500, envelope(False, message=str(e))

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def index_handler(environ, *args):
    return 200, "Hello World!"

def healthcheck_handler(environ, *args):
    return 200, envelope(True)

def list_vms_handler(environ, *args):
    vms = environ['services']['vms'].list_virtual_machines()
    return 200, envelope(True, data=vms)

def create_vm_handler(environ, *args):
    created = environ['services']['vms'].create_virtual_machine(get_request_data(environ))
    return 201, envelope(True, data=created)

def update_vm_handler(environ, vm_id):
    environ['services']['vms'].update_virtual_machine(int(vm_id), get_request_data(environ))
    return 200, envelope(True)

def delete_vm_handler(environ, vm_id):
    environ['services']['vms'].delete_virtual_machine(int(vm_id))
    return 200, envelope(True)

def list_bots_handler(environ, *args):
    bots = environ['services']['bots'].list_bots()
    return 200, envelope(True, data=bots)

def create_bot_handler(environ, *args):
    created = environ['services']['bots'].create_bot(get_request_data(environ))
    return 201, envelope(True, data=created)

def update_bot_handler(environ, bot_id):
    environ['services']['bots'].update_bot(int(bot_id), get_request_data(environ))
    return 200, envelope(True)

def delete_bot_handler(environ, bot_id):
    environ['services']['bots'].delete_bot(int(bot_id))
    return 200, envelope(True)

ROUTES = [
    ('GET', r'^/$', index_handler),
    ('GET', r'^/api/healthcheck$', healthcheck_handler),
    ('GET', r'^/api/vms$', list_vms_handler),
    ('POST', r'^/api/vms$', create_vm_handler),
    ('PATCH', r'^/api/vms/([0-9]+)$', update_vm_handler),
    ('DELETE', r'^/api/vms/([0-9]+)$', delete_vm_handler),
    ('GET', r'^/api/bots$', list_bots_handler),
    ('POST', r'^/api/bots$', create_bot_handler),
    ('PATCH', r'^/api/bots/([0-9]+)$', update_bot_handler),
    ('DELETE', r'^/api/bots/([0-9]+)$', delete_bot_handler),
]

def resolve_route(method, path):
    """(handler, path_args, path_exists)를 반환합니다."""
    path_exists = False
    for route_method, pattern, route_handler in ROUTES:
        if match := re.match(pattern, path):
            path_exists = True
            if method == route_method:
                return route_handler, match.groups(), True
    return None, (), path_exists

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_app(session_factory: sessionmaker):
    """
    세션 팩토리(커넥션 풀)를 주입받아 WSGI 애플리케이션을 생성합니다.
    요청마다 세션을 하나 열고, 응답 후 반드시 닫아 연결을 풀에 반환합니다.
    """
    def application(environ, start_response):
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")
        content_type = "application/json"

        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            environ['services'] = {
                'vms': VirtualMachineService(SqlalchemyVirtualMachineRepository(db_session)),
                'bots': BotService(SqlalchemyBotRepository(db_session)),
            }

            # 2. 라우팅 및 핸들러 실행
            handler, path_args, path_exists = resolve_route(method, path)
            if handler:
                status, response_body = handler(environ, *path_args)
                if handler is index_handler:
                    content_type = "text/plain; charset=utf-8"
            elif path_exists:
                status, response_body = 405, envelope(False, message=f"Method {method} not allowed.")
            else:
                status, response_body = 404, envelope(False, message="Not Found")

        except Exception as e:
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        logger.debug("%s %s -> %s", method, path, status)
        start_response(STATUS_TEXT[status], [("Content-Type", content_type)])
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """요청마다 별도의 스레드에서 처리하는 WSGI 서버."""
    daemon_threads = True

def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')

    engine = build_engine(settings.database_url, settings.db_pool_size, settings.db_schema)
    application = create_app(build_session_factory(engine))
    host, port = settings.listen_address()

    try:
        with make_server(host, port, application, server_class=ThreadingWSGIServer) as httpd:
            logger.info("Listening on %s:%s", host, port)
            httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    finally:
        engine.dispose()

if __name__ == "__main__":
    main()
