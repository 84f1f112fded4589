"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockcore.application.stock_core import Repositories
from stockcore.infrastructure.config import Settings
from stockcore.infrastructure.persistence.json_batch_repository import JsonBatchRepository
from stockcore.infrastructure.persistence.json_composition_repository import (
    JsonCompositionRepository,
)
from stockcore.infrastructure.persistence.json_material_repository import (
    JsonMaterialRepository,
)
from stockcore.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)
from stockcore.logging_config import configure_logging


def settings() -> Settings:
    return Settings.from_env()


def init_logging() -> None:
    configure_logging(level=settings().log_level)


def repositories() -> Repositories:
    data_dir = settings().data_dir
    return Repositories(
        materials=JsonMaterialRepository(data_dir / "materials.json"),
        batches=JsonBatchRepository(data_dir / "batches.json"),
        compositions=JsonCompositionRepository(data_dir / "compositions.json"),
        transactions=JsonTransactionRepository(data_dir / "transactions.json"),
    )
