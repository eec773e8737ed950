import logging
from typing import Any, Dict, List

from orchestrator.database import models
from orchestrator.repositories.interfaces import IBotRepository
from orchestrator.services.exceptions import (
    BotNotFoundError,
    InvalidPayloadError,
    translate_store_errors,
)
from orchestrator.services.schemas import (
    BotRow, CreateBotReq, UpdateBotReq, is_storable_id, parse_payload, to_wire
)

logger = logging.getLogger(__name__)


class BotService:
    """봇(스케줄 기반 자동화 작업) 레코드를 관리합니다. 작업을 실행하지는 않습니다."""

    def __init__(self, bot_repo: IBotRepository):
        self.bot_repo = bot_repo

    def list_bots(self) -> List[Dict[str, Any]]:
        """모든 봇을 id 오름차순으로 조회합니다. frequencia_execucao는 소문자 문자열로 직렬화됩니다."""
        with translate_store_errors("list bots"):
            bots = self.bot_repo.list_all()
        return [to_wire(BotRow, bot) for bot in bots]

    def create_bot(self, payload: Any) -> Dict[str, int]:
        """
        새로운 봇을 생성합니다.

        실행 주기는 DB 호출 전에 6개 값 중 하나인지 검증합니다.
        virtual_machine_id가 존재하지 않는 VM을 가리키면 DB의 외래 키 제약에 의해 실패하며,
        봇 레코드는 저장되지 않습니다.

        Args:
            payload: 요청 본문.

        Returns:
            생성된 봇의 id를 담은 딕셔너리.

        Raises:
            InvalidPayloadError: 필수 필드 누락, 타입 오류, 알 수 없는 실행 주기.
            ConstraintViolationError: 참조하는 VM이 없을 때.
        """
        request = parse_payload(CreateBotReq, payload)
        new_bot = models.Bot(**request.model_dump())

        with translate_store_errors("create bot"):
            created_bot = self.bot_repo.create(new_bot)

        logger.info(
            "Bot %s created (id=%s, vm=%s).",
            created_bot.automation_name, created_bot.id, created_bot.virtual_machine_id,
        )
        return {"id": created_bot.id}

    def update_bot(self, bot_id: int, payload: Any) -> None:
        """
        본문에 포함된 필드만 수정합니다. VM과 동일한 부분 수정 규칙을 따릅니다.

        Raises:
            InvalidPayloadError: 수정할 필드가 없거나, 필수 필드에 null을 보냈을 때.
            BotNotFoundError: 해당 id의 봇이 없을 때.
            ConstraintViolationError: 변경된 virtual_machine_id가 존재하지 않는 VM을 가리킬 때.
        """
        changes = parse_payload(UpdateBotReq, payload).changes()
        if not changes:
            raise InvalidPayloadError("No fields to update.")
        if not is_storable_id(bot_id):
            raise BotNotFoundError(f"Bot '{bot_id}' not found.")

        with translate_store_errors(f"update bot {bot_id}"):
            updated = self.bot_repo.update(bot_id, changes)

        if updated == 0:
            raise BotNotFoundError(f"Bot '{bot_id}' not found.")
        logger.info("Bot %s updated: %s", bot_id, sorted(changes))

    def delete_bot(self, bot_id: int) -> None:
        if not is_storable_id(bot_id):
            raise BotNotFoundError(f"Bot '{bot_id}' not found.")

        with translate_store_errors(f"delete bot {bot_id}"):
            deleted = self.bot_repo.delete(bot_id)

        if deleted == 0:
            raise BotNotFoundError(f"Bot '{bot_id}' not found.")
        logger.info("Bot %s deleted.", bot_id)
