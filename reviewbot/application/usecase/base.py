"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Application operation orchestrating one or more domain services.

    Use cases are request-scoped and take a pydantic request model.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
