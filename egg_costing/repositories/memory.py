"""
In-memory collaborator implementations.

Useful as a point-in-time snapshot handed to the engine, and in tests.
"""

import threading
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..models import ExpenseEntry, Lot, ProductionEntry
from .base import DateRange, ExpenseLedger, LotRegistry, ProductionLedger, RevenueSource


class InMemoryLotRegistry(LotRegistry):
    """Lot registry backed by a dict keyed by lot id."""

    def __init__(self, lots: Iterable[Lot] = ()):
        self._lock = threading.Lock()
        self._lots: Dict[str, Lot] = {lot.id: lot for lot in lots}

    def save(self, lot: Lot) -> Lot:
        with self._lock:
            self._lots[lot.id] = lot
        return lot

    def get_lot(self, lot_id: str) -> Optional[Lot]:
        return self._lots.get(lot_id)

    def list_active_lots(self) -> List[Lot]:
        return sorted((lot for lot in self._lots.values() if lot.is_active), key=lambda lot: lot.id)


class _AppendOnlyLedger:
    """Shared storage for dated, lot-tagged entries."""

    def __init__(self, entries: Iterable = ()):
        self._lock = threading.Lock()
        self._entries: List = list(entries)

    def append(self, entry):
        with self._lock:
            self._entries.append(entry)
        return entry

    def _find(self, lot_id: str, date_range: DateRange) -> list:
        with self._lock:
            entries = list(self._entries)
        matching = [e for e in entries if e.lote_id == lot_id and date_range.contains(e.fecha)]
        return sorted(matching, key=lambda e: (e.fecha, e.id or ""))


class InMemoryExpenseLedger(_AppendOnlyLedger, ExpenseLedger):
    def get_expenses(self, lot_id: str, date_range: DateRange) -> List[ExpenseEntry]:
        return self._find(lot_id, date_range)


class InMemoryProductionLedger(_AppendOnlyLedger, ProductionLedger):
    def get_production(self, lot_id: str, date_range: DateRange) -> List[ProductionEntry]:
        return self._find(lot_id, date_range)


class StaticRevenueSource(RevenueSource):
    """Revenue figures known up front, keyed by lot id."""

    def __init__(self, revenue: Optional[Dict[str, Decimal]] = None):
        self._revenue = dict(revenue or {})

    def get_revenue(self, lot_id: str) -> Optional[Decimal]:
        return self._revenue.get(lot_id)
