"""JSON file repository - one file per accelerator definition."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from src.accelerator_catalog.config import ACCELERATORS_DIR
from src.accelerator_catalog.repository import AcceleratorRepository
from src.accelerator_catalog.serialization import (
    accelerator_from_dict,
    accelerator_to_dict,
)
from src.adoption_engine.errors import InvalidParameter
from src.adoption_engine.models import AcceleratorDefinition

logger = logging.getLogger(__name__)


class JsonAcceleratorRepository(AcceleratorRepository):
    """Stores accelerators as ``accelerator_<id>.json`` files.

    Ids are used as part of the file name, so an id containing a path
    separator or ``..`` is rejected with :class:`InvalidParameter`.
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or ACCELERATORS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def get(self, accelerator_id: str) -> Optional[AcceleratorDefinition]:
        """Load an accelerator from its JSON file.

        Returns:
            AcceleratorDefinition if found and readable, None otherwise.
        """
        filepath = self._path_for(accelerator_id)

        if not filepath.exists():
            logger.debug("Accelerator file not found: %s", filepath)
            return None

        try:
            return self._read(filepath)
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
            logger.warning("Unreadable accelerator file %s: %s", filepath, e)
            return None

    def list(self) -> List[AcceleratorDefinition]:
        """Load every stored accelerator, sorted by name then id.

        Unreadable files are skipped with a warning.
        """
        accelerators = []

        for filepath in self.storage_dir.glob("accelerator_*.json"):
            try:
                accelerators.append(self._read(filepath))
            except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable accelerator file %s: %s", filepath, e)
                continue

        return sorted(accelerators, key=lambda acc: (acc.name, acc.id))

    def put(self, accelerator: AcceleratorDefinition) -> None:
        """Write an accelerator to its JSON file, replacing any earlier copy."""
        filepath = self._path_for(accelerator.id)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(accelerator_to_dict(accelerator), f, indent=2)

        logger.info(
            "Saved accelerator %s (%s) to %s",
            accelerator.id, accelerator.name, filepath,
        )

    def delete(self, accelerator_id: str) -> bool:
        """Delete an accelerator file.

        Returns:
            True if deleted, False if not found.
        """
        filepath = self._path_for(accelerator_id)

        if not filepath.exists():
            return False

        filepath.unlink()
        logger.info("Deleted accelerator %s", accelerator_id)
        return True

    def _path_for(self, accelerator_id: str) -> Path:
        if (
            not accelerator_id
            or "/" in accelerator_id
            or "\\" in accelerator_id
            or ".." in accelerator_id
        ):
            raise InvalidParameter(
                f"Accelerator id {accelerator_id!r} cannot be used as a file name"
            )
        return self.storage_dir / f"accelerator_{accelerator_id}.json"

    @staticmethod
    def _read(filepath: Path) -> AcceleratorDefinition:
        with open(filepath, "r", encoding="utf-8") as f:
            return accelerator_from_dict(json.load(f))
