"""
Repository Layer

Read-only collaborator interfaces (Lot Registry, Expense Ledger, Production
Ledger, Revenue source) and in-memory implementations of them.
"""

from .base import DateRange, ExpenseLedger, LotRegistry, ProductionLedger, RevenueSource
from .memory import (
    InMemoryExpenseLedger,
    InMemoryLotRegistry,
    InMemoryProductionLedger,
    StaticRevenueSource,
)

__all__ = [
    "DateRange",
    "ExpenseLedger",
    "LotRegistry",
    "ProductionLedger",
    "RevenueSource",
    "InMemoryExpenseLedger",
    "InMemoryLotRegistry",
    "InMemoryProductionLedger",
    "StaticRevenueSource",
]
