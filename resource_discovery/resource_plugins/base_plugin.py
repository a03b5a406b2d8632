from abc import ABC, abstractmethod
from typing import Any


class BaseResourcePlugin(ABC):
    @abstractmethod
    def discover(self) -> Any:
        """
        Read the current state of the local resource this plugin covers.
        """
        pass
