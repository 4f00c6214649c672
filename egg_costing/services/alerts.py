"""
Alert Generator

Threshold rules over the current day's cost, the phase analysis and the window
statistics. Rules are evaluated independently; several alerts may co-occur.
A rule whose input figure is ``None`` stays silent.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..config.settings import AlertThresholds
from ..models import (
    Alert,
    AlertKind,
    AlertSeverity,
    CostTrend,
    DailyCost,
    PerformanceStatistics,
    PhaseAnalysis,
)


@dataclass(frozen=True)
class AlertContext:
    current: DailyCost
    phase_analysis: PhaseAnalysis
    statistics: PerformanceStatistics
    previous: Optional[DailyCost] = None


class AlertRule:
    """Base class for alert rules"""

    kind: AlertKind

    def __init__(self, thresholds: AlertThresholds):
        self.thresholds = thresholds

    def evaluate(self, context: AlertContext) -> Optional[Alert]:
        """Override in subclasses to define trigger conditions"""
        raise NotImplementedError

    def create_alert(
        self,
        context: AlertContext,
        severity: AlertSeverity,
        message: str,
        action: str,
        observed,
        reference,
    ) -> Alert:
        return Alert(
            tipo=self.kind,
            severidad=severity,
            mensaje=message,
            accion_recomendada=action,
            valor_actual=float(observed),
            valor_referencia=float(reference),
            fecha=context.current.fecha,
        )


class HighCostRule(AlertRule):
    kind = AlertKind.COSTO_ALTO

    def evaluate(self, context: AlertContext) -> Optional[Alert]:
        cost = context.current.costo_por_huevo
        maximum = self.thresholds.costo_maximo_por_huevo
        if cost is None or cost <= maximum:
            return None

        severity = AlertSeverity.CRITICAL if cost > self.thresholds.costo_critico_por_huevo else AlertSeverity.WARNING
        return self.create_alert(
            context,
            severity,
            f"El costo por huevo ({cost:.2f}) está por encima del máximo configurado ({maximum:.2f})",
            "Revisar gastos de alimentación y medicamentos",
            cost,
            maximum,
        )


class LowProductionRule(AlertRule):
    kind = AlertKind.BAJA_PRODUCCION

    def evaluate(self, context: AlertContext) -> Optional[Alert]:
        current = context.current
        average = context.statistics.promedio_huevos_por_dia
        if not context.phase_analysis.en_produccion or not current.tiene_registro_produccion or average <= 0:
            return None

        floor = average * (1 - self.thresholds.max_caida_produccion_pct / 100)
        if current.cantidad_huevos >= floor:
            return None

        drop_pct = (average - current.cantidad_huevos) / average * 100
        return self.create_alert(
            context,
            AlertSeverity.WARNING,
            f"La producción del día ({current.cantidad_huevos} huevos) está {drop_pct:.1f}% "
            f"por debajo del promedio del período ({average:.0f})",
            "Revisar salud del lote y condiciones ambientales",
            current.cantidad_huevos,
            average,
        )


class InefficiencyRule(AlertRule):
    kind = AlertKind.INEFICIENCIA

    def evaluate(self, context: AlertContext) -> Optional[Alert]:
        efficiency = context.statistics.eficiencia_produccion
        minimum = self.thresholds.eficiencia_minima
        if not context.phase_analysis.en_produccion or efficiency is None or efficiency >= minimum:
            return None

        severity = AlertSeverity.CRITICAL if efficiency < self.thresholds.eficiencia_critica else AlertSeverity.WARNING
        return self.create_alert(
            context,
            severity,
            f"La eficiencia de producción ({efficiency:.1f}%) está por debajo del mínimo ({minimum:.1f}%)",
            "Comparar la postura con el estándar de la raza y revisar alimentación e iluminación",
            efficiency,
            minimum,
        )


class ExpenseIncreaseRule(AlertRule):
    kind = AlertKind.INCREMENTO_GASTOS

    def evaluate(self, context: AlertContext) -> Optional[Alert]:
        previous = context.previous
        if previous is None or previous.gasto_total_del_dia <= 0:
            return None

        today = context.current.gasto_total_del_dia
        yesterday = previous.gasto_total_del_dia
        increase_pct = float((today - yesterday) / yesterday * Decimal("100"))
        if increase_pct <= self.thresholds.max_incremento_gasto_pct:
            return None

        sustained = context.statistics.tendencia_costo == CostTrend.INCREMENTO
        return self.create_alert(
            context,
            AlertSeverity.WARNING if sustained else AlertSeverity.INFO,
            f"El gasto del día aumentó {increase_pct:.1f}% respecto al día anterior"
            + (" y la tendencia del costo por huevo es creciente" if sustained else ""),
            "Monitorear gastos recientes y comparar con períodos anteriores",
            today,
            yesterday,
        )


class AlertGenerator:
    """Runs every alert rule against a lot's current figures."""

    def __init__(self, thresholds: Optional[AlertThresholds] = None):
        self.thresholds = thresholds or AlertThresholds()
        self.rules: List[AlertRule] = [
            HighCostRule(self.thresholds),
            LowProductionRule(self.thresholds),
            InefficiencyRule(self.thresholds),
            ExpenseIncreaseRule(self.thresholds),
        ]

    def evaluate(
        self,
        current: DailyCost,
        phase_analysis: PhaseAnalysis,
        statistics: PerformanceStatistics,
        previous: Optional[DailyCost] = None,
    ) -> List[Alert]:
        context = AlertContext(current, phase_analysis, statistics, previous)
        alerts = []
        for rule in self.rules:
            alert = rule.evaluate(context)
            if alert is not None:
                alerts.append(alert)
        return alerts
