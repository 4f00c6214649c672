"""
Phase Partitioner

Splits a lot's history at the first day with eggs: expenses before it are
rearing (Initial phase) costs amortised per bird, expenses on or after it are
maintenance (Productive phase) costs amortised per egg.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_CEILING
from typing import Callable, Optional

from ..exceptions import InvalidLotStateError
from ..models import (
    BreakEvenPoint,
    CostBreakdown,
    InitialPhase,
    Lot,
    PhaseAnalysis,
    ProductivePhase,
)
from ..models.base import HUNDRED, ZERO
from ..utils.date_utils import DateUtils
from ..utils.structured_logging import get_structured_logger
from .daily_cost import build_daily_series, cost_per_unit
from .snapshot_service import LotSnapshot, SnapshotService, sum_expenses, sum_units

logger = get_structured_logger().get_logger(__name__)


def _require_birds(lot: Lot) -> Decimal:
    if lot.cantidad_inicial <= 0:
        raise InvalidLotStateError(
            f"Lote {lot.id} tiene cantidad inicial {lot.cantidad_inicial}; no se puede calcular costo por ave",
            {"lot_id": lot.id, "cantidad_inicial": lot.cantidad_inicial},
        )
    return Decimal(lot.cantidad_inicial)


def _percentage(part: Decimal, whole: Decimal) -> float:
    if whole <= 0:
        return 0.0
    return float(part / whole * HUNDRED)


def rentability(revenue: Optional[Decimal], cost: Decimal) -> Optional[float]:
    """(revenue - cost) / cost * 100, omitted when revenue is unknown or cost is zero."""
    if revenue is None or cost <= 0:
        return None
    return float((revenue - cost) / cost * HUNDRED)


def analyze_phases(snapshot: LotSnapshot) -> PhaseAnalysis:
    """Phase-level economics of the snapshot's lot."""
    lot = snapshot.lot
    birds = _require_birds(lot)
    boundary = snapshot.production_start

    initial_expenses = snapshot.expenses_before(boundary)
    initial_cost = lot.inherited_cost + sum_expenses(initial_expenses)
    initial_end = boundary or snapshot.as_of
    fase_inicial = InitialPhase(
        costo_total=initial_cost,
        costo_unitario=initial_cost / birds,
        costos_heredados=lot.inherited_cost,
        fecha_inicio=lot.fecha_nacimiento,
        fecha_finalizacion=boundary,
        duracion_dias=max(DateUtils.days_between(lot.fecha_nacimiento, initial_end), 0),
        gastos_detalle=initial_expenses,
    )

    fase_productiva = None
    productive_cost = ZERO
    units = 0
    if boundary is not None:
        productive_cost = sum_expenses(snapshot.expenses_between(boundary, None))
        units = sum_units(snapshot.production_between(boundary, None))
        daily = build_daily_series(snapshot, boundary, snapshot.as_of)
        defined = [d for d in daily if d.has_cost]
        fase_productiva = ProductivePhase(
            fecha_inicio_produccion=boundary,
            dias_en_produccion=DateUtils.days_between(boundary, snapshot.as_of),
            huevos_totales_producidos=units,
            gasto_total_mantenimiento=productive_cost,
            costo_promedio_por_huevo=cost_per_unit(productive_cost, units),
            costos_detalle_diario=tuple(daily),
            # ties go to the earliest day
            mejor_dia_costo=min(defined, key=lambda d: (d.costo_por_huevo, d.fecha)) if defined else None,
            peor_dia_costo=min(defined, key=lambda d: (-d.costo_por_huevo, d.fecha)) if defined else None,
        )

    total_cost = initial_cost + productive_cost
    return PhaseAnalysis(
        lote_id=lot.id,
        fase_inicial=fase_inicial,
        fase_productiva=fase_productiva,
        costo_total_lote=total_cost,
        costo_promedio_integral=cost_per_unit(total_cost, units),
        ingresos=snapshot.revenue,
        rentabilidad=rentability(snapshot.revenue, total_cost),
    )


def build_cost_breakdown(lot: Lot, analysis: PhaseAnalysis) -> CostBreakdown:
    """Rearing vs production share of the lot's cost."""
    birds = _require_birds(lot)
    rearing = analysis.fase_inicial.costo_total
    production = analysis.fase_productiva.gasto_total_mantenimiento if analysis.fase_productiva else ZERO
    total = analysis.costo_total_lote
    return CostBreakdown(
        costo_levante_total=rearing,
        costo_levante_por_ave=rearing / birds,
        porcentaje_levante=_percentage(rearing, total),
        costo_produccion_total=production,
        costo_produccion_por_ave=production / birds,
        porcentaje_produccion=_percentage(production, total),
        costo_total_por_ave=total / birds,
        costo_total_lote=total,
    )


def build_break_even(analysis: PhaseAnalysis, egg_price: Optional[Decimal]) -> Optional[BreakEvenPoint]:
    """Eggs needed at ``egg_price`` to recover the Initial-phase cost."""
    if egg_price is None or egg_price <= 0:
        return None
    rearing = analysis.fase_inicial.costo_total
    needed = int((rearing / egg_price).to_integral_value(rounding=ROUND_CEILING))
    produced = analysis.fase_productiva.huevos_totales_producidos if analysis.fase_productiva else 0
    if needed > 0:
        reached_pct = min(produced / needed * 100, 100.0)
    else:
        reached_pct = 100.0
    return BreakEvenPoint(
        precio_venta_huevo=egg_price,
        huevos_necesarios=needed,
        huevos_producidos=produced,
        alcanzado=produced >= needed,
        porcentaje_alcanzado=reached_pct,
        ingresos_necesarios=rearing,
        ingresos_actuales=egg_price * produced,
    )


class PhasePartitioner:
    """Computes the PhaseAnalysis of a lot from its ledgers."""

    def __init__(self, snapshot_service: SnapshotService, clock: Callable[[], date] = date.today):
        self.snapshots = snapshot_service
        self.clock = clock

    def compute(self, lot_id: str, as_of: Optional[date] = None) -> PhaseAnalysis:
        """
        Raises:
            LotNotFoundError: if the lot does not resolve in the registry
            InvalidLotStateError: if the lot's starting bird count is not positive
        """
        snapshot = self.snapshots.load(lot_id, as_of or self.clock())
        return self.analyze(snapshot)

    def analyze(self, snapshot: LotSnapshot) -> PhaseAnalysis:
        analysis = analyze_phases(snapshot)
        logger.info(
            "Phase analysis computed",
            lot_id=snapshot.lot_id,
            fecha_inicio_produccion=analysis.fecha_limite_fases.isoformat() if analysis.fecha_limite_fases else None,
            costo_total_lote=str(analysis.costo_total_lote),
        )
        return analysis
