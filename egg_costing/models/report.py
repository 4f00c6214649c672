"""
Per-lot cost report and its sections.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from .analytics import Alert, DailyCost, PerformanceStatistics, PhaseAnalysis
from .base import DerivedModel


class CostBreakdown(DerivedModel):
    """Rearing vs production share of the lot's total cost."""

    costo_levante_total: Decimal
    costo_levante_por_ave: Decimal
    porcentaje_levante: float
    costo_produccion_total: Decimal
    costo_produccion_por_ave: Decimal
    porcentaje_produccion: float
    costo_total_por_ave: Decimal
    costo_total_lote: Decimal


class BreakEvenPoint(DerivedModel):
    """Eggs needed at a given sale price to recover the rearing cost."""

    precio_venta_huevo: Decimal
    huevos_necesarios: int
    huevos_producidos: int
    alcanzado: bool
    porcentaje_alcanzado: float
    ingresos_necesarios: Decimal
    ingresos_actuales: Decimal


class RankedLot(DerivedModel):
    lote_id: str
    costo_por_huevo: Decimal


class LotRanking(DerivedModel):
    """Position of a lot among active lots by average cost per egg (lower is better)."""

    posicion_ranking: Optional[int] = None
    total_lotes: int
    mejor_lote: Optional[RankedLot] = None
    promedio_general: Optional[Decimal] = None


class ExecutiveSummary(DerivedModel):
    costo_por_huevo_actual: Optional[Decimal] = None
    eficiencia_general: Optional[float] = None
    rentabilidad_porcentaje: Optional[float] = None
    recomendacion_principal: str


class Projections(DerivedModel):
    dias: int
    costos_estimados: Decimal
    huevos_estimados: float
    rentabilidad_estimada: Optional[float] = None


class CostReport(DerivedModel):
    """Everything the presentation layer needs about one lot's egg costs."""

    lote_id: str
    nombre_lote: str
    fecha_generacion: date
    costo_diario: DailyCost
    analisis_por_fases: PhaseAnalysis
    estadisticas_rendimiento: PerformanceStatistics
    alertas: Tuple[Alert, ...] = ()
    resumen_ejecutivo: ExecutiveSummary
    desglose_costos: CostBreakdown
    punto_equilibrio: Optional[BreakEvenPoint] = None
    proyecciones_futuras: Projections
    recomendaciones: Tuple[str, ...] = ()
    comparativa_con_otros_lotes: Optional[LotRanking] = None
