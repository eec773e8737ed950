import enum

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class Frequency(str, enum.Enum):
    """봇의 실행 주기. DB에는 네이티브 ENUM(enum_frequencia)으로, JSON에는 소문자 문자열로 저장됩니다."""
    DAILY = "diaria"
    WEEKLY = "semanal"
    MONTHLY = "mensal"
    QUARTERLY = "trimestral"
    INTERVAL = "intervalo"
    ON_DEMAND = "demanda"


class Bot(Base):
    """
    특정 VM에서 언제, 얼마나 자주 실행되어야 하는지를 기술하는 자동화 작업 레코드입니다.
    실제로 작업을 실행하지는 않습니다.
    """
    __tablename__ = "bots"
    id = Column(Integer, primary_key=True)
    automation_name = Column("nome_automacao", String, nullable=False)
    active = Column("flg_status_bot", Boolean, nullable=False)
    execution_frequency = Column(
        "frequencia_execucao",
        Enum(
            Frequency,
            name="enum_frequencia",
            values_callable=lambda members: [member.value for member in members],
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
    )
    execution_day = Column("dia_execucao", String, nullable=True)
    execution_time = Column("hora_execucao", String, nullable=True)
    execution_interval = Column("intervalo_execucao", Integer, nullable=True)
    execution_tolerance = Column("tolerancia_execucao", Integer, nullable=True)

    virtual_machine_id = Column(Integer, ForeignKey("virtual_machines.id"), nullable=False)
    virtual_machine = relationship("VirtualMachine", back_populates="bots")
