from .sqlalchemy_virtual_machine_repository import SqlalchemyVirtualMachineRepository
from .sqlalchemy_bot_repository import SqlalchemyBotRepository

__all__ = ["SqlalchemyVirtualMachineRepository", "SqlalchemyBotRepository"]
