"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases are the in-process API offered to the request layer: they
    take plain request models (string ids) and return response models.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
