"""
Point-in-time ledger snapshots for a lot.

Computations receive a ``LotSnapshot`` and never talk to collaborators
themselves, so the same snapshot always yields the same records.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from ..exceptions import LotNotFoundError, UpstreamUnavailableError
from ..models import ExpenseEntry, Lot, ProductionEntry
from ..models.base import ZERO
from ..repositories.base import DateRange, ExpenseLedger, LotRegistry, ProductionLedger, RevenueSource
from ..utils.date_utils import DateUtils
from ..utils.structured_logging import get_structured_logger
from .error_handler import ErrorHandler, get_error_handler

logger = get_structured_logger().get_logger(__name__)


@dataclass(frozen=True)
class LotSnapshot:
    """A lot and its ledger slices as of one day."""

    lot: Lot
    as_of: date
    expenses: Tuple[ExpenseEntry, ...] = ()
    production: Tuple[ProductionEntry, ...] = ()
    revenue: Optional[Decimal] = None

    @classmethod
    def build(
        cls,
        lot: Lot,
        as_of: date,
        expenses=(),
        production=(),
        revenue: Optional[Decimal] = None,
    ) -> "LotSnapshot":
        """Normalise ledger rows: keep this lot's rows up to ``as_of``, sorted by date."""
        expenses = tuple(sorted(
            (e for e in expenses if e.lote_id == lot.id and e.fecha <= as_of),
            key=lambda e: (e.fecha, e.id or ""),
        ))
        production = tuple(sorted(
            (p for p in production if p.lote_id == lot.id and p.fecha <= as_of),
            key=lambda p: (p.fecha, p.id or ""),
        ))
        return cls(lot=lot, as_of=as_of, expenses=expenses, production=production, revenue=revenue)

    @property
    def lot_id(self) -> str:
        return self.lot.id

    @property
    def production_start(self) -> Optional[date]:
        """Date of the first production entry with eggs, the phase boundary."""
        for entry in self.production:
            if entry.cantidad > 0:
                return entry.fecha
        return None

    def expenses_between(self, start: Optional[date], end: Optional[date]) -> Tuple[ExpenseEntry, ...]:
        return tuple(e for e in self.expenses if DateUtils.in_range(e.fecha, start, end))

    def production_between(self, start: Optional[date], end: Optional[date]) -> Tuple[ProductionEntry, ...]:
        return tuple(p for p in self.production if DateUtils.in_range(p.fecha, start, end))

    def expenses_before(self, boundary: Optional[date]) -> Tuple[ExpenseEntry, ...]:
        if boundary is None:
            return self.expenses
        return tuple(e for e in self.expenses if e.fecha < boundary)


def sum_expenses(entries) -> Decimal:
    return sum((e.total for e in entries), ZERO)


def sum_units(entries) -> int:
    return sum(p.cantidad for p in entries)


class SnapshotService:
    """Reads a lot's ledgers through the collaborators."""

    def __init__(
        self,
        lot_registry: LotRegistry,
        expense_ledger: ExpenseLedger,
        production_ledger: ProductionLedger,
        revenue_source: Optional[RevenueSource] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.lot_registry = lot_registry
        self.expense_ledger = expense_ledger
        self.production_ledger = production_ledger
        self.revenue_source = revenue_source
        self.error_handler = error_handler or get_error_handler()

    def get_lot(self, lot_id: str) -> Lot:
        lot = self.lot_registry.get_lot(lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        return lot

    def load(self, lot_id: str, as_of: date, with_revenue: bool = True) -> LotSnapshot:
        """Fetch the full history of a lot up to ``as_of``."""
        lot = self.get_lot(lot_id)
        date_range = DateRange.up_to(as_of)
        expenses = self.expense_ledger.get_expenses(lot_id, date_range)
        production = self.production_ledger.get_production(lot_id, date_range)
        revenue = self.fetch_revenue(lot_id) if with_revenue else None

        logger.debug(
            "Ledger snapshot loaded",
            lot_id=lot_id,
            as_of=as_of.isoformat(),
            expenses=len(expenses),
            production=len(production),
        )
        return LotSnapshot.build(lot, as_of, expenses, production, revenue)

    def fetch_revenue(self, lot_id: str) -> Optional[Decimal]:
        """Revenue for the lot, or ``None`` when unknown or the source is down."""
        if self.revenue_source is None:
            return None
        try:
            revenue = self.revenue_source.get_revenue(lot_id)
            return Decimal(str(revenue)) if revenue is not None else None
        except Exception as e:
            error = e if isinstance(e, UpstreamUnavailableError) else UpstreamUnavailableError("revenue", str(e))
            self.error_handler.handle_upstream_error(
                error, service="revenue", lot_id=lot_id, degraded_section="rentabilidad"
            )
            return None
