"""
Public entry points of the egg production cost engine.
"""

from datetime import date
from typing import Optional

from .models import CostReport, DailyCost, LotRanking, PerformanceStatistics, PhaseAnalysis
from .services.daily_cost import DailyCostCalculator
from .services.phase_analysis import PhasePartitioner
from .services.reporting import ReportCompiler
from .services.statistics import StatisticsEngine


class EggCostingEngine:
    """Facade over the cost engine services, one method per exposed operation."""

    def __init__(
        self,
        daily_cost_calculator: DailyCostCalculator,
        phase_partitioner: PhasePartitioner,
        statistics_engine: StatisticsEngine,
        report_compiler: ReportCompiler,
    ):
        self.daily_cost_calculator = daily_cost_calculator
        self.phase_partitioner = phase_partitioner
        self.statistics_engine = statistics_engine
        self.report_compiler = report_compiler

    def compute_daily_cost(self, lot_id: str, fecha: Optional[date] = None) -> DailyCost:
        return self.daily_cost_calculator.compute(lot_id, fecha)

    def compute_phase_analysis(self, lot_id: str) -> PhaseAnalysis:
        return self.phase_partitioner.compute(lot_id)

    def compute_statistics(
        self,
        lot_id: str,
        window_days: Optional[int] = None,
        produccion_teorica_por_dia: Optional[float] = None,
    ) -> PerformanceStatistics:
        return self.statistics_engine.compute(lot_id, window_days, produccion_teorica_por_dia)

    def compile_report(self, lot_id: str, include_ranking: Optional[bool] = None) -> CostReport:
        return self.report_compiler.compile(lot_id, include_ranking)

    def compute_ranking(self, lot_id: str) -> Optional[LotRanking]:
        return self.report_compiler.compute_ranking(lot_id)
