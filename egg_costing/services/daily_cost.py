"""
Daily cost per egg.

Expenses dated before the lot's first laying day belong to the rearing phase
and are left out of daily views.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from ..models import DailyCost, ExpenseEntry, ProductionEntry
from ..repositories.base import DateRange
from ..utils.structured_logging import get_structured_logger
from .snapshot_service import LotSnapshot, SnapshotService, sum_expenses, sum_units

logger = get_structured_logger().get_logger(__name__)


def cost_per_unit(total: Decimal, units: int) -> Optional[Decimal]:
    """``total / units``, or ``None`` when there are no units."""
    if units <= 0:
        return None
    return total / Decimal(units)


def _daily_record(
    lot_id: str,
    day: date,
    expenses: Tuple[ExpenseEntry, ...],
    production: Tuple[ProductionEntry, ...],
    boundary: Optional[date],
) -> DailyCost:
    if boundary is None or day < boundary:
        expenses = ()
    units = sum_units(production)
    spend = sum_expenses(expenses)
    return DailyCost(
        fecha=day,
        lote_id=lot_id,
        cantidad_huevos=units,
        gasto_total_del_dia=spend,
        costo_por_huevo=cost_per_unit(spend, units),
        gastos_del_dia=expenses,
        tiene_registro_produccion=bool(production),
    )


def build_daily_cost(snapshot: LotSnapshot, day: date) -> DailyCost:
    """DailyCost for one day of the snapshot."""
    return _daily_record(
        snapshot.lot_id,
        day,
        snapshot.expenses_between(day, day),
        snapshot.production_between(day, day),
        snapshot.production_start,
    )


def build_daily_series(
    snapshot: LotSnapshot,
    start: date,
    end: date,
) -> List[DailyCost]:
    """
    DailyCost records from ``start`` to ``end`` inclusive, in date order.

    Only days holding at least one expense or production entry are returned.
    """
    expenses_by_day: Dict[date, List[ExpenseEntry]] = defaultdict(list)
    production_by_day: Dict[date, List[ProductionEntry]] = defaultdict(list)
    for entry in snapshot.expenses_between(start, end):
        expenses_by_day[entry.fecha].append(entry)
    for entry in snapshot.production_between(start, end):
        production_by_day[entry.fecha].append(entry)

    days = sorted(set(expenses_by_day) | set(production_by_day))

    boundary = snapshot.production_start
    return [
        _daily_record(
            snapshot.lot_id,
            day,
            tuple(expenses_by_day.get(day, ())),
            tuple(production_by_day.get(day, ())),
            boundary,
        )
        for day in days
    ]


class DailyCostCalculator:
    """Computes cost per egg for one lot and day."""

    def __init__(self, snapshot_service: SnapshotService, clock: Callable[[], date] = date.today):
        self.snapshots = snapshot_service
        self.clock = clock

    def compute(self, lot_id: str, fecha: Optional[date] = None) -> DailyCost:
        """
        Cost per egg for ``lot_id`` on ``fecha`` (today by default).

        Raises:
            LotNotFoundError: if the lot does not resolve in the registry
        """
        day = fecha or self.clock()
        lot = self.snapshots.get_lot(lot_id)
        # production history up to the day is needed to place the phase boundary
        production = self.snapshots.production_ledger.get_production(lot_id, DateRange.up_to(day))
        expenses = self.snapshots.expense_ledger.get_expenses(lot_id, DateRange.single_day(day))
        snapshot = LotSnapshot.build(lot, day, expenses, production)

        daily = build_daily_cost(snapshot, day)
        logger.debug(
            "Daily cost computed",
            lot_id=lot_id,
            fecha=day.isoformat(),
            cantidad_huevos=daily.cantidad_huevos,
            gasto_total_del_dia=str(daily.gasto_total_del_dia),
            estado=daily.estado.value,
        )
        return daily
