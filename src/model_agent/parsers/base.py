from __future__ import annotations
from abc import ABC, abstractmethod
from model_agent.model import Table

class Parser(ABC):
    @abstractmethod
    def can_parse(self, text: str) -> bool: ...
    @abstractmethod
    def parse(self, data: bytes | str) -> Table: ...
