# tests/services/test_virtual_machine_service.py
import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError

from orchestrator.services.virtual_machine_service import VirtualMachineService
from orchestrator.services.exceptions import *
from orchestrator.repositories.interfaces import IVirtualMachineRepository
from orchestrator.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_vm_repo() -> MagicMock:
    """IVirtualMachineRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IVirtualMachineRepository)

@pytest.fixture
def vm_service(mock_vm_repo: MagicMock) -> VirtualMachineService:
    return VirtualMachineService(mock_vm_repo)

# ===================================================================
#  list_virtual_machines 테스트 스위트
# ===================================================================
class TestListVirtualMachines:
    def test_list_serializes_rows_with_column_names(self, vm_service, mock_vm_repo):
        """리포지토리가 반환한 행을 JSON 컬럼 이름으로 직렬화하는지 테스트합니다."""
        # === Arrange ===
        mock_vm_repo.list_all.return_value = [
            models.VirtualMachine(id=1, name="vm1", ipv4_address="10.0.0.1", active=True),
            models.VirtualMachine(id=2, name="vm2", ipv4_address=None, active=False),
        ]

        # === Act ===
        vms = vm_service.list_virtual_machines()

        # === Assert ===
        assert vms == [
            {"id": 1, "nome_vm": "vm1", "endereco_ipv4_vm": "10.0.0.1", "flg_status_vm": True},
            {"id": 2, "nome_vm": "vm2", "endereco_ipv4_vm": None, "flg_status_vm": False},
        ]

    def test_list_store_unavailable(self, vm_service, mock_vm_repo):
        """저장소 연결 실패가 PersistenceError로 변환되는지 테스트합니다."""
        mock_vm_repo.list_all.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(PersistenceError, match="connection refused"):
            vm_service.list_virtual_machines()

# ===================================================================
#  create_virtual_machine 테스트 스위트
# ===================================================================
class TestCreateVirtualMachine:
    def test_create_success(self, vm_service, mock_vm_repo):
        """VM 생성 성공 시 DB가 부여한 id만 반환하는지 테스트합니다."""
        # === Arrange ===
        def assign_id(vm):
            vm.id = 7
            return vm
        mock_vm_repo.create.side_effect = assign_id

        # === Act ===
        result = vm_service.create_virtual_machine(
            {"nome_vm": "vm1", "endereco_ipv4_vm": "10.0.0.1", "flg_status_vm": True}
        )

        # === Assert ===
        assert result == {"id": 7}
        created = mock_vm_repo.create.call_args.args[0]
        assert isinstance(created, models.VirtualMachine)
        assert (created.name, created.ipv4_address, created.active) == ("vm1", "10.0.0.1", True)

    @pytest.mark.parametrize("payload", [
        {"endereco_ipv4_vm": "10.0.0.1", "flg_status_vm": True},
        {"nome_vm": "vm1"},
        {"nome_vm": "", "flg_status_vm": True},
        {"nome_vm": "vm1", "flg_status_vm": "yes"},
        {"id": 3, "nome_vm": "vm1", "flg_status_vm": True},
        None,
        ["nome_vm"],
    ])
    def test_create_rejects_malformed_payload(self, vm_service, mock_vm_repo, payload):
        """잘못된 본문은 DB 호출 전에 InvalidPayloadError로 거부되는지 테스트합니다."""
        with pytest.raises(InvalidPayloadError):
            vm_service.create_virtual_machine(payload)
        mock_vm_repo.create.assert_not_called()

# ===================================================================
#  update_virtual_machine 테스트 스위트
# ===================================================================
class TestUpdateVirtualMachine:
    def test_update_passes_only_supplied_fields(self, vm_service, mock_vm_repo):
        """본문에 없는 필드(endereco_ipv4_vm)는 수정 대상에 포함되지 않는지 테스트합니다."""
        mock_vm_repo.update.return_value = 1

        vm_service.update_virtual_machine(1, {"nome_vm": "x", "flg_status_vm": True})

        mock_vm_repo.update.assert_called_once_with(1, {"name": "x", "active": True})

    def test_update_explicit_null_clears_optional_field(self, vm_service, mock_vm_repo):
        mock_vm_repo.update.return_value = 1

        vm_service.update_virtual_machine(1, {"endereco_ipv4_vm": None})

        mock_vm_repo.update.assert_called_once_with(1, {"ipv4_address": None})

    def test_update_rejects_null_on_required_field(self, vm_service, mock_vm_repo):
        with pytest.raises(InvalidPayloadError, match="nome_vm"):
            vm_service.update_virtual_machine(1, {"nome_vm": None})
        mock_vm_repo.update.assert_not_called()

    def test_update_rejects_empty_patch(self, vm_service, mock_vm_repo):
        with pytest.raises(InvalidPayloadError):
            vm_service.update_virtual_machine(1, {})
        mock_vm_repo.update.assert_not_called()

    def test_update_unknown_id(self, vm_service, mock_vm_repo):
        """영향받은 행이 0이면 VirtualMachineNotFoundError가 발생하는지 테스트합니다."""
        mock_vm_repo.update.return_value = 0

        with pytest.raises(VirtualMachineNotFoundError):
            vm_service.update_virtual_machine(99, {"flg_status_vm": False})

# ===================================================================
#  delete_virtual_machine 테스트 스위트
# ===================================================================
class TestDeleteVirtualMachine:
    def test_delete_success(self, vm_service, mock_vm_repo):
        mock_vm_repo.delete.return_value = 1

        vm_service.delete_virtual_machine(1)

        mock_vm_repo.delete.assert_called_once_with(1)

    def test_delete_unknown_id(self, vm_service, mock_vm_repo):
        mock_vm_repo.delete.return_value = 0

        with pytest.raises(VirtualMachineNotFoundError):
            vm_service.delete_virtual_machine(1)

    def test_delete_referenced_vm(self, vm_service, mock_vm_repo):
        """봇이 참조 중인 VM 삭제 시 외래 키 오류가 ConstraintViolationError로 전달되는지 테스트합니다."""
        mock_vm_repo.delete.side_effect = IntegrityError(
            "DELETE", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(ConstraintViolationError, match="FOREIGN KEY"):
            vm_service.delete_virtual_machine(1)

# ===================================================================
#  정수 범위 테스트 스위트
# ===================================================================
class TestIntegerRange:
    def test_update_oversized_id_skips_store(self, vm_service, mock_vm_repo):
        with pytest.raises(VirtualMachineNotFoundError):
            vm_service.update_virtual_machine(2**31, {"flg_status_vm": False})
        mock_vm_repo.update.assert_not_called()

    def test_delete_oversized_id_skips_store(self, vm_service, mock_vm_repo):
        with pytest.raises(VirtualMachineNotFoundError):
            vm_service.delete_virtual_machine(10**30)
        mock_vm_repo.delete.assert_not_called()

    def test_create_rejects_attribute_names(self, vm_service, mock_vm_repo):
        with pytest.raises(InvalidPayloadError):
            vm_service.create_virtual_machine({"name": "vm1", "active": True})
        mock_vm_repo.create.assert_not_called()
