"""
Derived cost-accounting records.

Every record here is computed on demand from a ledger snapshot and is frozen.
``None`` on a figure means NO_DATA: the inputs were well formed but empty.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import Field, computed_field

from .base import DerivedModel, DataStatus, ZERO
from .ledger import ExpenseEntry


class CostTrend(str, Enum):
    """Direction of the cost-per-egg series over a window."""

    INCREMENTO = "INCREMENTO"
    DECREMENTO = "DECREMENTO"
    ESTABLE = "ESTABLE"


class AlertKind(str, Enum):
    COSTO_ALTO = "COSTO_ALTO"
    BAJA_PRODUCCION = "BAJA_PRODUCCION"
    INEFICIENCIA = "INEFICIENCIA"
    INCREMENTO_GASTOS = "INCREMENTO_GASTOS"


class AlertSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class DailyCost(DerivedModel):
    """Cost per egg for one lot and day."""

    fecha: date
    lote_id: str
    cantidad_huevos: int = 0
    gasto_total_del_dia: Decimal = ZERO
    costo_por_huevo: Optional[Decimal] = None
    gastos_del_dia: Tuple[ExpenseEntry, ...] = ()
    tiene_registro_produccion: bool = False

    @computed_field
    @property
    def estado(self) -> DataStatus:
        return DataStatus.OK if self.costo_por_huevo is not None else DataStatus.NO_DATA

    @property
    def has_cost(self) -> bool:
        return self.costo_por_huevo is not None


class InitialPhase(DerivedModel):
    """Rearing period, amortised per bird."""

    costo_total: Decimal
    costo_unitario: Decimal
    costos_heredados: Decimal = ZERO
    fecha_inicio: date
    fecha_finalizacion: Optional[date] = None
    duracion_dias: int
    gastos_detalle: Tuple[ExpenseEntry, ...] = ()


class ProductivePhase(DerivedModel):
    """Laying period, amortised per egg."""

    fecha_inicio_produccion: date
    dias_en_produccion: int
    huevos_totales_producidos: int
    gasto_total_mantenimiento: Decimal
    costo_promedio_por_huevo: Optional[Decimal] = None
    costos_detalle_diario: Tuple[DailyCost, ...] = ()
    mejor_dia_costo: Optional[DailyCost] = None
    peor_dia_costo: Optional[DailyCost] = None


class PhaseAnalysis(DerivedModel):
    """Phase-level economics for a lot."""

    lote_id: str
    fase_inicial: InitialPhase
    fase_productiva: Optional[ProductivePhase] = None
    costo_total_lote: Decimal
    costo_promedio_integral: Optional[Decimal] = None
    ingresos: Optional[Decimal] = None
    rentabilidad: Optional[float] = None

    @property
    def fecha_limite_fases(self) -> Optional[date]:
        """First day with eggs, i.e. the Initial/Productive boundary."""
        if self.fase_productiva is None:
            return None
        return self.fase_productiva.fecha_inicio_produccion

    @property
    def en_produccion(self) -> bool:
        return self.fase_productiva is not None


class AnalysisPeriod(DerivedModel):
    fecha_inicio: date
    fecha_fin: date
    dias: int


class Alert(DerivedModel):
    """Advisory produced by a threshold rule."""

    tipo: AlertKind
    severidad: AlertSeverity
    mensaje: str
    accion_recomendada: str
    valor_actual: float
    valor_referencia: float
    fecha: date


class PerformanceStatistics(DerivedModel):
    """Rolling-window production and cost aggregates."""

    lote_id: str
    periodo_analisis: AnalysisPeriod
    huevos_totales: int
    promedio_huevos_por_dia: float
    promedio_huevos_por_gallina: Optional[float] = None
    gasto_total_periodo: Decimal
    gasto_promedio_por_dia: Decimal
    costo_promedio_por_huevo: Optional[Decimal] = None
    produccion_teorica_por_dia: Optional[float] = None
    eficiencia_produccion: Optional[float] = Field(
        default=None, description="Actual eggs/day as a percentage of the theoretical rate"
    )
    tendencia_costo: CostTrend = CostTrend.ESTABLE
    serie_costos: Tuple[DailyCost, ...] = ()
    alertas: Tuple[Alert, ...] = ()
