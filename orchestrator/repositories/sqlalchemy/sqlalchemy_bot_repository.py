from typing import Any, Dict, List
from sqlalchemy.orm import Session
from orchestrator.database import models
from orchestrator.repositories.interfaces import IBotRepository

class SqlalchemyBotRepository(IBotRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_all(self) -> List[models.Bot]:
        return self.db.query(models.Bot).order_by(models.Bot.id.asc()).all()

    def create(self, bot_model: models.Bot) -> models.Bot:
        try:
            self.db.add(bot_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return bot_model

    def update(self, bot_id: int, changes: Dict[str, Any]) -> int:
        try:
            updated = self.db.query(models.Bot).filter(
                models.Bot.id == bot_id
            ).update(changes, synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return updated

    def delete(self, bot_id: int) -> int:
        try:
            deleted = self.db.query(models.Bot).filter(
                models.Bot.id == bot_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted
