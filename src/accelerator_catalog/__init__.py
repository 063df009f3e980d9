from src.accelerator_catalog.accelerator_factory import (
    create_new_accelerator,
    with_skill,
    with_task_impact,
    without_skill,
    without_task_impact,
)
from src.accelerator_catalog.json_repository import JsonAcceleratorRepository
from src.accelerator_catalog.repository import (
    AcceleratorRepository,
    InMemoryAcceleratorRepository,
)
from src.accelerator_catalog.serialization import (
    accelerator_from_dict,
    accelerator_to_dict,
    load_catalog_file,
    save_catalog_file,
)
from src.accelerator_catalog.workspace import AcceleratorWorkspace

__all__ = [
    "AcceleratorRepository",
    "AcceleratorWorkspace",
    "InMemoryAcceleratorRepository",
    "JsonAcceleratorRepository",
    "accelerator_from_dict",
    "accelerator_to_dict",
    "create_new_accelerator",
    "load_catalog_file",
    "save_catalog_file",
    "with_skill",
    "with_task_impact",
    "without_skill",
    "without_task_impact",
]
