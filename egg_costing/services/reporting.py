"""
Report Compiler

Assembles the daily cost, phase analysis, window statistics and alerts of a
lot into one immutable CostReport, with an optional ranking against the other
active lots.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from ..config.settings import Settings
from ..exceptions import CostingError
from ..models import (
    BreakEvenPoint,
    CostBreakdown,
    CostReport,
    DailyCost,
    ExecutiveSummary,
    Lot,
    LotRanking,
    PerformanceStatistics,
    PhaseAnalysis,
    Projections,
    RankedLot,
)
from ..utils.structured_logging import get_structured_logger
from .daily_cost import build_daily_cost
from .error_handler import ErrorHandler, get_error_handler
from .phase_analysis import analyze_phases, build_break_even, build_cost_breakdown, rentability
from .snapshot_service import SnapshotService
from .statistics import StatisticsEngine

logger = get_structured_logger().get_logger(__name__)


def build_projections(
    statistics: PerformanceStatistics,
    days: int,
    egg_price: Optional[Decimal] = None,
) -> Projections:
    """Project the window's daily averages ``days`` ahead."""
    costs = statistics.gasto_promedio_por_dia * days
    eggs = statistics.promedio_huevos_por_dia * days
    projected = None
    if egg_price is not None:
        projected = rentability(egg_price * Decimal(str(eggs)), costs)
    return Projections(dias=days, costos_estimados=costs, huevos_estimados=eggs, rentabilidad_estimada=projected)


def build_executive_summary(
    daily: DailyCost,
    statistics: PerformanceStatistics,
    analysis: PhaseAnalysis,
    settings: Settings,
) -> ExecutiveSummary:
    thresholds = settings.alerts
    if daily.costo_por_huevo is not None and daily.costo_por_huevo > thresholds.costo_maximo_por_huevo:
        recommendation = "Se recomienda revisar los costos de producción, están por encima del umbral óptimo"
    elif statistics.eficiencia_produccion is not None and statistics.eficiencia_produccion < thresholds.eficiencia_minima:
        recommendation = "La eficiencia de producción está baja, revisar condiciones del lote"
    elif not analysis.en_produccion:
        recommendation = "El lote aún no inicia postura; los gastos se acumulan como costo de levante"
    else:
        recommendation = "El lote está funcionando dentro de parámetros normales"

    return ExecutiveSummary(
        costo_por_huevo_actual=daily.costo_por_huevo,
        eficiencia_general=statistics.eficiencia_produccion,
        rentabilidad_porcentaje=analysis.rentabilidad,
        recomendacion_principal=recommendation,
    )


def build_recommendations(
    lot: Lot,
    as_of: date,
    analysis: PhaseAnalysis,
    breakdown: CostBreakdown,
    break_even: Optional[BreakEvenPoint],
    settings: Settings,
) -> Tuple[str, ...]:
    config = settings.analysis
    price = config.precio_venta_huevo
    recommendations: List[str] = []

    if lot.es_transferido and breakdown.porcentaje_levante > config.participacion_levante_max_pct:
        recommendations.append(
            f"Los costos de levante representan más del {config.participacion_levante_max_pct:.0f}% "
            "del costo total. Considera optimizar la fase de levante."
        )

    lifetime = analysis.costo_promedio_integral
    if price is not None and lifetime is not None and lifetime > price:
        recommendations.append(
            f"El costo por huevo ({lifetime:.2f}) es mayor al precio de venta ({price:.2f}). Revisa tus costos."
        )

    if break_even is not None and not break_even.alcanzado:
        missing = break_even.huevos_necesarios - break_even.huevos_producidos
        recommendations.append(f"Necesitas producir {missing} huevos más para cubrir los costos de levante.")

    if lot.age_in_weeks(as_of) > config.edad_maxima_semanas:
        recommendations.append(
            f"El lote tiene más de {config.edad_maxima_semanas} semanas. "
            "Considera evaluar si es rentable mantenerlo en producción."
        )

    return tuple(recommendations)


class ReportCompiler:
    """Builds the cost report of a lot."""

    def __init__(
        self,
        snapshot_service: SnapshotService,
        statistics_engine: StatisticsEngine,
        settings: Optional[Settings] = None,
        error_handler: Optional[ErrorHandler] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.snapshots = snapshot_service
        self.statistics_engine = statistics_engine
        self.settings = settings or Settings()
        self.error_handler = error_handler or get_error_handler()
        self.clock = clock

    def compile(self, lot_id: str, include_ranking: Optional[bool] = None) -> CostReport:
        """
        Compile the report of ``lot_id`` as of today.

        Raises:
            LotNotFoundError: if the lot does not resolve in the registry
            InvalidLotStateError: if the lot's starting bird count is not positive
        """
        as_of = self.clock()
        snapshot = self.snapshots.load(lot_id, as_of)
        lot = snapshot.lot

        analysis = analyze_phases(snapshot)
        statistics = self.statistics_engine.analyze(snapshot, phase_analysis=analysis)
        daily = build_daily_cost(snapshot, as_of)
        breakdown = build_cost_breakdown(lot, analysis)
        price = self.settings.analysis.precio_venta_huevo
        break_even = build_break_even(analysis, price)

        if include_ranking is None:
            include_ranking = self.settings.analysis.ranking_enabled
        ranking = self.compute_ranking(lot_id, as_of) if include_ranking else None

        report = CostReport(
            lote_id=lot.id,
            nombre_lote=lot.nombre,
            fecha_generacion=as_of,
            costo_diario=daily,
            analisis_por_fases=analysis,
            estadisticas_rendimiento=statistics,
            alertas=statistics.alertas,
            resumen_ejecutivo=build_executive_summary(daily, statistics, analysis, self.settings),
            desglose_costos=breakdown,
            punto_equilibrio=break_even,
            proyecciones_futuras=build_projections(statistics, self.settings.analysis.dias_proyeccion, price),
            recomendaciones=build_recommendations(lot, as_of, analysis, breakdown, break_even, self.settings),
            comparativa_con_otros_lotes=ranking,
        )
        logger.info(
            "Cost report compiled",
            lot_id=lot_id,
            fecha_generacion=as_of.isoformat(),
            alertas=len(report.alertas),
            ranking=ranking is not None,
        )
        return report

    def compute_ranking(self, lot_id: str, as_of: Optional[date] = None) -> Optional[LotRanking]:
        """
        Rank active lots by productive-phase average cost per egg, lowest first.

        Returns ``None`` when the registry cannot list lots. Lots that fail
        individually (invalid state or a ledger outage), or have no cost per
        egg yet, are left out.
        """
        as_of = as_of or self.clock()
        try:
            lots = self.snapshots.lot_registry.list_active_lots()
        except Exception as e:
            self.error_handler.handle_upstream_error(
                e, service="lot_registry", lot_id=lot_id, degraded_section="comparativa_con_otros_lotes"
            )
            return None

        ranked: List[RankedLot] = []
        for other in lots:
            try:
                analysis = analyze_phases(self.snapshots.load(other.id, as_of, with_revenue=False))
            except CostingError as e:
                self.error_handler.handle_exception(e, context="compute_ranking", lot_id=other.id)
                continue
            except Exception as e:
                self.error_handler.handle_upstream_error(
                    e, service="ledger", lot_id=other.id, degraded_section="comparativa_con_otros_lotes"
                )
                continue
            if analysis.fase_productiva and analysis.fase_productiva.costo_promedio_por_huevo is not None:
                ranked.append(RankedLot(lote_id=other.id, costo_por_huevo=analysis.fase_productiva.costo_promedio_por_huevo))

        ranked.sort(key=lambda r: (r.costo_por_huevo, r.lote_id))
        if not ranked:
            return LotRanking(total_lotes=0)

        position = next((i for i, r in enumerate(ranked, start=1) if r.lote_id == lot_id), None)
        average = sum((r.costo_por_huevo for r in ranked), Decimal("0")) / Decimal(len(ranked))
        return LotRanking(
            posicion_ranking=position,
            total_lotes=len(ranked),
            mejor_lote=ranked[0],
            promedio_general=average,
        )
