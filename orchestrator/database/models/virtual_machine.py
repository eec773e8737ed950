from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class VirtualMachine(Base):
    """
    봇(Bot)이 실행되는 가상 머신을 나타냅니다.
    하나의 VM은 0개 이상의 봇을 가질 수 있으며, 봇이 참조하는 동안에는 삭제할 수 없습니다.
    컬럼 이름은 기존 orchestrator 스키마의 이름을 그대로 사용합니다.
    """
    __tablename__ = "virtual_machines"
    id = Column(Integer, primary_key=True)
    name = Column("nome_vm", String, nullable=False)
    ipv4_address = Column("endereco_ipv4_vm", String, nullable=True)
    active = Column("flg_status_vm", Boolean, nullable=False)

    # 삭제 시 cascade 없음: 참조 무결성은 DB의 외래 키 제약에 맡깁니다.
    bots = relationship("Bot", back_populates="virtual_machine", passive_deletes="all")
