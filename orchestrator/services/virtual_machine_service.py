import logging
from typing import Any, Dict, List

from orchestrator.database import models
from orchestrator.repositories.interfaces import IVirtualMachineRepository
from orchestrator.services.exceptions import (
    InvalidPayloadError,
    VirtualMachineNotFoundError,
    translate_store_errors,
)
from orchestrator.services.schemas import (
    CreateVirtualMachineReq,
    UpdateVirtualMachineReq,
    VirtualMachineRow,
    is_storable_id,
    parse_payload,
    to_wire,
)

logger = logging.getLogger(__name__)


class VirtualMachineService:
    """가상 머신 레코드의 조회, 생성, 수정, 삭제를 담당합니다."""

    def __init__(self, vm_repo: IVirtualMachineRepository):
        self.vm_repo = vm_repo

    def list_virtual_machines(self) -> List[Dict[str, Any]]:
        """
        모든 VM을 id 오름차순으로 조회합니다.

        Returns:
            VM 정보(id, nome_vm, endereco_ipv4_vm, flg_status_vm)가 담긴 딕셔너리의 리스트.

        Raises:
            PersistenceError: 저장소에 접근할 수 없을 때.
        """
        with translate_store_errors("list virtual machines"):
            vms = self.vm_repo.list_all()
        return [to_wire(VirtualMachineRow, vm) for vm in vms]

    def create_virtual_machine(self, payload: Any) -> Dict[str, int]:
        """
        새로운 VM을 생성합니다. id는 항상 DB가 부여합니다.

        Args:
            payload: 요청 본문 (nome_vm, flg_status_vm 필수, endereco_ipv4_vm 선택).

        Returns:
            생성된 VM의 id를 담은 딕셔너리.

        Raises:
            InvalidPayloadError: 필수 필드가 없거나 타입이 맞지 않을 때 (DB 호출 전).
            PersistenceError: DB 작업이 실패했을 때.
        """
        request = parse_payload(CreateVirtualMachineReq, payload)
        new_vm = models.VirtualMachine(**request.model_dump())

        with translate_store_errors("create virtual machine"):
            created_vm = self.vm_repo.create(new_vm)

        logger.info("Virtual machine %s created (id=%s).", created_vm.name, created_vm.id)
        return {"id": created_vm.id}

    def update_virtual_machine(self, vm_id: int, payload: Any) -> None:
        """
        본문에 포함된 필드만 수정합니다. 포함되지 않은 필드는 기존 값을 유지하며,
        endereco_ipv4_vm에 null을 보내면 값이 비워집니다.

        Raises:
            InvalidPayloadError: 수정할 필드가 없거나, 필수 필드에 null을 보냈을 때.
            VirtualMachineNotFoundError: 해당 id의 VM이 없을 때.
        """
        changes = parse_payload(UpdateVirtualMachineReq, payload).changes()
        if not changes:
            raise InvalidPayloadError("No fields to update.")
        if not is_storable_id(vm_id):
            raise VirtualMachineNotFoundError(f"Virtual machine '{vm_id}' not found.")

        with translate_store_errors(f"update virtual machine {vm_id}"):
            updated = self.vm_repo.update(vm_id, changes)

        if updated == 0:
            raise VirtualMachineNotFoundError(f"Virtual machine '{vm_id}' not found.")
        logger.info("Virtual machine %s updated: %s", vm_id, sorted(changes))

    def delete_virtual_machine(self, vm_id: int) -> None:
        """
        VM을 삭제합니다. 봇이 참조 중인 VM은 DB의 외래 키 제약에 의해 삭제되지 않습니다.

        Raises:
            VirtualMachineNotFoundError: 해당 id의 VM이 없을 때.
            ConstraintViolationError: 이 VM을 참조하는 봇이 있을 때.
        """
        if not is_storable_id(vm_id):
            raise VirtualMachineNotFoundError(f"Virtual machine '{vm_id}' not found.")

        with translate_store_errors(f"delete virtual machine {vm_id}"):
            deleted = self.vm_repo.delete(vm_id)

        if deleted == 0:
            raise VirtualMachineNotFoundError(f"Virtual machine '{vm_id}' not found.")
        logger.info("Virtual machine %s deleted.", vm_id)
