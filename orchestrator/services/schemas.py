"""요청 본문 검증과 응답 직렬화를 위한 pydantic 모델."""

from typing import Annotated, Any, ClassVar, Dict, Optional, Tuple

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictStr, StringConstraints, ValidationError,
    model_validator,
)

from orchestrator.database.models import Frequency
from orchestrator.services.exceptions import InvalidPayloadError

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]

# DB의 INTEGER 컬럼(32비트) 범위
INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
Int32 = Annotated[int, Field(strict=True, ge=INT32_MIN, le=INT32_MAX)]


class _Request(BaseModel):
    # 알 수 없는 필드(클라이언트가 보낸 id 포함)는 거부합니다.
    model_config = ConfigDict(extra="forbid")


class _Patch(_Request):
    """
    부분 수정(PATCH) 요청의 공통 동작.
    본문에 없는 필드는 변경하지 않고, null로 명시된 선택 필드는 값을 비웁니다.
    """
    not_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_on_required_fields(self):
        for name in self.not_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                alias = type(self).model_fields[name].alias or name
                raise ValueError(f"'{alias}' cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """본문에 실제로 포함된 필드만 속성 이름 기준으로 반환합니다."""
        return self.model_dump(exclude_unset=True)


class CreateVirtualMachineReq(_Request):
    name: NonEmptyStr = Field(alias="nome_vm")
    ipv4_address: Optional[StrictStr] = Field(default=None, alias="endereco_ipv4_vm")
    active: StrictBool = Field(alias="flg_status_vm")


class UpdateVirtualMachineReq(_Patch):
    not_nullable: ClassVar[Tuple[str, ...]] = ("name", "active")

    name: Optional[NonEmptyStr] = Field(default=None, alias="nome_vm")
    ipv4_address: Optional[StrictStr] = Field(default=None, alias="endereco_ipv4_vm")
    active: Optional[StrictBool] = Field(default=None, alias="flg_status_vm")


class CreateBotReq(_Request):
    automation_name: NonEmptyStr = Field(alias="nome_automacao")
    active: StrictBool = Field(alias="flg_status_bot")
    execution_frequency: Frequency = Field(alias="frequencia_execucao")
    execution_day: Optional[StrictStr] = Field(default=None, alias="dia_execucao")
    execution_time: Optional[StrictStr] = Field(default=None, alias="hora_execucao")
    execution_interval: Optional[Int32] = Field(default=None, alias="intervalo_execucao")
    execution_tolerance: Optional[Int32] = Field(default=None, alias="tolerancia_execucao")
    virtual_machine_id: Int32


class UpdateBotReq(_Patch):
    not_nullable: ClassVar[Tuple[str, ...]] = ("automation_name", "active", "execution_frequency", "virtual_machine_id")

    automation_name: Optional[NonEmptyStr] = Field(default=None, alias="nome_automacao")
    active: Optional[StrictBool] = Field(default=None, alias="flg_status_bot")
    execution_frequency: Optional[Frequency] = Field(default=None, alias="frequencia_execucao")
    execution_day: Optional[StrictStr] = Field(default=None, alias="dia_execucao")
    execution_time: Optional[StrictStr] = Field(default=None, alias="hora_execucao")
    execution_interval: Optional[Int32] = Field(default=None, alias="intervalo_execucao")
    execution_tolerance: Optional[Int32] = Field(default=None, alias="tolerancia_execucao")
    virtual_machine_id: Optional[Int32] = None


class VirtualMachineRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str = Field(serialization_alias="nome_vm")
    ipv4_address: Optional[str] = Field(serialization_alias="endereco_ipv4_vm")
    active: bool = Field(serialization_alias="flg_status_vm")


class BotRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    automation_name: str = Field(serialization_alias="nome_automacao")
    active: bool = Field(serialization_alias="flg_status_bot")
    execution_frequency: Frequency = Field(serialization_alias="frequencia_execucao")
    execution_day: Optional[str] = Field(serialization_alias="dia_execucao")
    execution_time: Optional[str] = Field(serialization_alias="hora_execucao")
    execution_interval: Optional[int] = Field(serialization_alias="intervalo_execucao")
    execution_tolerance: Optional[int] = Field(serialization_alias="tolerancia_execucao")
    virtual_machine_id: int


def to_wire(row_model: type[BaseModel], obj: Any) -> Dict[str, Any]:
    """ORM 객체를 JSON 응답용 딕셔너리(컬럼 이름 기준)로 변환합니다."""
    return row_model.model_validate(obj).model_dump(by_alias=True, mode="json")


def parse_payload(model: type[BaseModel], data: Any) -> BaseModel:
    """
    요청 본문을 주어진 모델로 검증합니다.

    Raises:
        InvalidPayloadError: 본문이 JSON 객체가 아니거나 검증에 실패했을 때.
    """
    if not isinstance(data, dict):
        raise InvalidPayloadError("Request body must be a JSON object.")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidPayloadError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        problems.append(f"{field}: {item['msg']}")
    return "Invalid request body: " + "; ".join(problems)


def is_storable_id(value: int) -> bool:
    """경로의 id가 DB의 INTEGER 컬럼에 담길 수 있는 값인지 확인합니다."""
    return INT32_MIN <= value <= INT32_MAX
