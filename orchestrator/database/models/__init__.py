from .virtual_machine import VirtualMachine
from .bot import Bot, Frequency

__all__ = ["VirtualMachine", "Bot", "Frequency"]
