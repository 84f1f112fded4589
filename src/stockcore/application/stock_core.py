"""Wires the five domain services over one set of repositories.

Handlers build a StockCore from the repositories they are given, the
same way they would build a single domain service.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockcore.domain.exceptions import NotFoundError
from stockcore.domain.model.material import Material
from stockcore.domain.repository.batch_repository import BatchRepository
from stockcore.domain.repository.composition_repository import CompositionRepository
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.domain.repository.transaction_repository import TransactionRepository
from stockcore.domain.service.adjustment_coordinator import AdjustmentCoordinator
from stockcore.domain.service.batch_ledger import DEFAULT_LOCATION, BatchLedger
from stockcore.domain.service.composition_graph import CompositionGraph
from stockcore.domain.service.stock_resolver import StockResolver
from stockcore.domain.service.stock_status_service import StockStatusService


@dataclass(frozen=True)
class Repositories:
    materials: MaterialRepository
    batches: BatchRepository
    compositions: CompositionRepository
    transactions: TransactionRepository


@dataclass(frozen=True)
class StockCore:
    ledger: BatchLedger
    graph: CompositionGraph
    resolver: StockResolver
    status: StockStatusService
    coordinator: AdjustmentCoordinator

    @staticmethod
    def build(repos: Repositories, default_location: str = DEFAULT_LOCATION) -> StockCore:
        ledger = BatchLedger(repos.batches, repos.materials, default_location)
        graph = CompositionGraph(repos.compositions, repos.materials)
        resolver = StockResolver(ledger, graph, repos.materials)
        return StockCore(
            ledger=ledger,
            graph=graph,
            resolver=resolver,
            status=StockStatusService(resolver),
            coordinator=AdjustmentCoordinator(
                ledger, graph, resolver, repos.materials, repos.transactions
            ),
        )


def material_by_code(repos: Repositories, code: str) -> Material:
    material = repos.materials.get_by_code(code)
    if material is None:
        raise NotFoundError(f"Material not found: '{code}'")
    return material
