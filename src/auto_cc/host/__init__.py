# Project hosts: in-memory sessions and REAPER

from .base import Host
from .memory import MemoryHost, load_session, save_session

__all__ = [
    "Host",
    "MemoryHost",
    "load_session",
    "save_session",
]
