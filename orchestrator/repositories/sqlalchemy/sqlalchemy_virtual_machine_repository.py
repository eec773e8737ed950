from typing import Any, Dict, List
from sqlalchemy.orm import Session
from orchestrator.database import models
from orchestrator.repositories.interfaces import IVirtualMachineRepository

class SqlalchemyVirtualMachineRepository(IVirtualMachineRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_all(self) -> List[models.VirtualMachine]:
        return self.db.query(models.VirtualMachine).order_by(models.VirtualMachine.id.asc()).all()

    def create(self, vm_model: models.VirtualMachine) -> models.VirtualMachine:
        try:
            self.db.add(vm_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return vm_model

    def update(self, vm_id: int, changes: Dict[str, Any]) -> int:
        try:
            updated = self.db.query(models.VirtualMachine).filter(
                models.VirtualMachine.id == vm_id
            ).update(changes, synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return updated

    def delete(self, vm_id: int) -> int:
        try:
            deleted = self.db.query(models.VirtualMachine).filter(
                models.VirtualMachine.id == vm_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted
