from .virtual_machine import IVirtualMachineRepository
from .bot import IBotRepository

__all__ = ["IVirtualMachineRepository", "IBotRepository"]
