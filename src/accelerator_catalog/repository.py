"""Accelerator repository interface and in-memory implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from src.adoption_engine.models import AcceleratorDefinition

logger = logging.getLogger(__name__)


class AcceleratorRepository(ABC):
    """Storage for accelerator definitions, keyed by id.

    Injected into :class:`AcceleratorWorkspace`; the adoption engine never
    talks to a repository directly.
    """

    @abstractmethod
    def get(self, accelerator_id: str) -> Optional[AcceleratorDefinition]:
        """Return the accelerator with *accelerator_id*, or None."""

    @abstractmethod
    def list(self) -> List[AcceleratorDefinition]:
        """Return all stored accelerators."""

    @abstractmethod
    def put(self, accelerator: AcceleratorDefinition) -> None:
        """Insert or replace *accelerator*."""

    @abstractmethod
    def delete(self, accelerator_id: str) -> bool:
        """Delete an accelerator. Returns False if it did not exist."""


class InMemoryAcceleratorRepository(AcceleratorRepository):
    """Repository backed by a dict; preserves insertion order."""

    def __init__(self, accelerators: Optional[Iterable[AcceleratorDefinition]] = None):
        self._accelerators: Dict[str, AcceleratorDefinition] = {}
        for accelerator in accelerators or []:
            self.put(accelerator)

    def get(self, accelerator_id: str) -> Optional[AcceleratorDefinition]:
        return self._accelerators.get(accelerator_id)

    def list(self) -> List[AcceleratorDefinition]:
        return list(self._accelerators.values())

    def put(self, accelerator: AcceleratorDefinition) -> None:
        self._accelerators[accelerator.id] = accelerator

    def delete(self, accelerator_id: str) -> bool:
        if accelerator_id not in self._accelerators:
            return False
        del self._accelerators[accelerator_id]
        logger.debug("Deleted accelerator %s", accelerator_id)
        return True
