from .base import OptionStore
from .db import DBOptionStore
from .memory import MemoryOptionStore

__all__ = ["DBOptionStore", "MemoryOptionStore", "OptionStore"]
