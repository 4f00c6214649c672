"""
Statistics & Trend Engine

Rolling-window production and cost aggregates for a lot, the efficiency ratio
against the breed standard, and the cost-per-egg trend.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

import pandas as pd

from ..config.settings import AnalysisConfig
from ..models import AnalysisPeriod, CostTrend, PerformanceStatistics, PhaseAnalysis
from ..utils.date_utils import DateUtils
from ..utils.series import make_daily_index, records_to_frame
from ..utils.structured_logging import get_structured_logger
from .alerts import AlertGenerator
from .breed_standards import BreedStandardProvider, ExpectedProductionProvider
from .daily_cost import build_daily_cost, build_daily_series
from .phase_analysis import analyze_phases
from .snapshot_service import LotSnapshot, SnapshotService, sum_expenses

logger = get_structured_logger().get_logger(__name__)


def classify_trend(values: Sequence, threshold_pct: float = 5.0) -> CostTrend:
    """
    Compare the mean of the second half of an ordered series with the first half.

    A relative change above ``threshold_pct`` is INCREMENTO, below its negative
    DECREMENTO, anything else ESTABLE. Fewer than two points is ESTABLE.
    """
    series = pd.Series([float(v) for v in values], dtype="float64")
    if len(series) < 2:
        return CostTrend.ESTABLE

    half = len(series) // 2
    first_mean = series.iloc[:half].mean()
    second_mean = series.iloc[half:].mean()

    if first_mean == 0:
        return CostTrend.INCREMENTO if second_mean > 0 else CostTrend.ESTABLE

    change_pct = (second_mean - first_mean) / first_mean * 100
    if change_pct > threshold_pct:
        return CostTrend.INCREMENTO
    if change_pct < -threshold_pct:
        return CostTrend.DECREMENTO
    return CostTrend.ESTABLE


def compute_statistics(
    snapshot: LotSnapshot,
    window_days: int,
    expected_units_per_day: Optional[float] = None,
    trend_threshold_pct: float = 5.0,
) -> PerformanceStatistics:
    """PerformanceStatistics over the ``window_days`` ending on the snapshot day, without alerts."""
    start, end = DateUtils.window_ending(snapshot.as_of, window_days)
    lot = snapshot.lot

    production = make_daily_index(
        records_to_frame(snapshot.production_between(start, end), "cantidad", "huevos"),
        start,
        end,
        ["huevos"],
    )
    total_units = int(production["huevos"].sum())
    # missing days count as zero production
    avg_units = total_units / window_days

    spend = sum_expenses(snapshot.expenses_between(start, end))
    daily = build_daily_series(snapshot, start, end)
    defined = [d for d in daily if d.has_cost]
    avg_cost = (
        sum((d.costo_por_huevo for d in defined), Decimal("0")) / Decimal(len(defined))
        if defined
        else None
    )

    per_hen = total_units / (lot.cantidad_actual * window_days) if lot.cantidad_actual > 0 else None
    efficiency = None
    if expected_units_per_day is not None and expected_units_per_day > 0:
        efficiency = avg_units / expected_units_per_day * 100

    return PerformanceStatistics(
        lote_id=lot.id,
        periodo_analisis=AnalysisPeriod(fecha_inicio=start, fecha_fin=end, dias=window_days),
        huevos_totales=total_units,
        promedio_huevos_por_dia=avg_units,
        promedio_huevos_por_gallina=per_hen,
        gasto_total_periodo=spend,
        gasto_promedio_por_dia=spend / Decimal(window_days),
        costo_promedio_por_huevo=avg_cost,
        produccion_teorica_por_dia=expected_units_per_day,
        eficiencia_produccion=efficiency,
        tendencia_costo=classify_trend([d.costo_por_huevo for d in defined], trend_threshold_pct),
        serie_costos=tuple(defined),
    )


class StatisticsEngine:
    """Computes window statistics for a lot and attaches the alerts they raise."""

    def __init__(
        self,
        snapshot_service: SnapshotService,
        alert_generator: AlertGenerator,
        config: Optional[AnalysisConfig] = None,
        expected_production: Optional[ExpectedProductionProvider] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.snapshots = snapshot_service
        self.alert_generator = alert_generator
        self.config = config or AnalysisConfig()
        self.expected_production = expected_production or BreedStandardProvider()
        self.clock = clock

    def compute(
        self,
        lot_id: str,
        window_days: Optional[int] = None,
        produccion_teorica_por_dia: Optional[float] = None,
    ) -> PerformanceStatistics:
        """
        Statistics for the window ending today (``config.window_days`` long by default).

        Args:
            lot_id: Lot to analyse
            window_days: Window length in days, at least 1
            produccion_teorica_por_dia: Theoretical eggs/day overriding the breed standard

        Raises:
            LotNotFoundError: if the lot does not resolve in the registry
            InvalidLotStateError: if the lot's starting bird count is not positive
            ValueError: if ``window_days`` is smaller than 1
        """
        snapshot = self.snapshots.load(lot_id, self.clock(), with_revenue=False)
        return self.analyze(snapshot, window_days=window_days, produccion_teorica_por_dia=produccion_teorica_por_dia)

    def analyze(
        self,
        snapshot: LotSnapshot,
        window_days: Optional[int] = None,
        produccion_teorica_por_dia: Optional[float] = None,
        phase_analysis: Optional[PhaseAnalysis] = None,
    ) -> PerformanceStatistics:
        window_days = window_days if window_days is not None else self.config.window_days
        expected = produccion_teorica_por_dia
        if expected is None:
            expected = self.expected_production.expected_daily_units(snapshot.lot, snapshot.as_of)

        statistics = compute_statistics(snapshot, window_days, expected, self.config.umbral_tendencia_pct)

        phase_analysis = phase_analysis or analyze_phases(snapshot)
        current = build_daily_cost(snapshot, snapshot.as_of)
        previous = build_daily_cost(snapshot, DateUtils.previous_day(snapshot.as_of))
        alerts = self.alert_generator.evaluate(current, phase_analysis, statistics, previous)

        logger.info(
            "Performance statistics computed",
            lot_id=snapshot.lot_id,
            window_days=window_days,
            huevos_totales=statistics.huevos_totales,
            tendencia_costo=statistics.tendencia_costo.value,
            alertas=len(alerts),
        )
        return statistics.model_copy(update={"alertas": tuple(alerts)})
