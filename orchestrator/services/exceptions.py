# orchestrator/services/exceptions.py
from contextlib import contextmanager
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# --- Not Found Exceptions ---
class VirtualMachineNotFoundError(Exception):
    """VM을 찾을 수 없을 때"""
    pass

class BotNotFoundError(Exception):
    """봇을 찾을 수 없을 때"""
    pass

# --- Validation Exceptions ---
class InvalidPayloadError(ValueError):
    """요청 본문이 JSON이 아니거나, 필수 필드 누락/타입 오류가 있을 때"""
    pass

# --- Persistence Exceptions ---
class PersistenceError(Exception):
    """저장소 연결 실패 등 DB 작업이 실패했을 때"""
    pass

class ConstraintViolationError(PersistenceError):
    """외래 키, ENUM 등 DB 제약 조건을 위반했을 때"""
    pass


@contextmanager
def translate_store_errors(operation: str):
    """
    블록 안에서 발생한 SQLAlchemy 예외를 서비스 계층 예외로 변환합니다.
    원본 DB 드라이버의 메시지를 그대로 전달합니다.
    """
    try:
        yield
    except IntegrityError as e:
        logger.warning("%s rejected by store constraint: %s", operation, e.orig)
        raise ConstraintViolationError(str(e.orig)) from e
    except SQLAlchemyError as e:
        logger.error("%s failed: %s", operation, e)
        raise PersistenceError(str(getattr(e, "orig", None) or e)) from e
