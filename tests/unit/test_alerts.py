"""
Unit tests for alert rules
"""

from datetime import date
from decimal import Decimal

import pytest

from egg_costing.config.settings import AlertThresholds
from egg_costing.models import (
    AlertKind,
    AlertSeverity,
    AnalysisPeriod,
    CostTrend,
    DailyCost,
    InitialPhase,
    PerformanceStatistics,
    PhaseAnalysis,
    ProductivePhase,
)
from egg_costing.services.alerts import AlertGenerator

DAY = date(2024, 3, 31)


def make_daily(eggs=200, spend="40.00", fecha=DAY, recorded=True) -> DailyCost:
    spend = Decimal(spend)
    return DailyCost(
        fecha=fecha,
        lote_id="lote-1",
        cantidad_huevos=eggs,
        gasto_total_del_dia=spend,
        costo_por_huevo=spend / Decimal(eggs) if eggs else None,
        tiene_registro_produccion=recorded,
    )


def make_analysis(producing=True) -> PhaseAnalysis:
    productive = None
    if producing:
        productive = ProductivePhase(
            fecha_inicio_produccion=date(2024, 3, 1),
            dias_en_produccion=30,
            huevos_totales_producidos=6000,
            gasto_total_mantenimiento=Decimal("1200"),
            costo_promedio_por_huevo=Decimal("0.2"),
        )
    return PhaseAnalysis(
        lote_id="lote-1",
        fase_inicial=InitialPhase(
            costo_total=Decimal("1500"),
            costo_unitario=Decimal("15"),
            fecha_inicio=date(2023, 10, 1),
            duracion_dias=152,
        ),
        fase_productiva=productive,
        costo_total_lote=Decimal("2700"),
    )


def make_statistics(avg=200.0, efficiency=None, trend=CostTrend.ESTABLE) -> PerformanceStatistics:
    return PerformanceStatistics(
        lote_id="lote-1",
        periodo_analisis=AnalysisPeriod(fecha_inicio=date(2024, 3, 2), fecha_fin=DAY, dias=30),
        huevos_totales=int(avg * 30),
        promedio_huevos_por_dia=avg,
        gasto_total_periodo=Decimal("1200"),
        gasto_promedio_por_dia=Decimal("40"),
        eficiencia_produccion=efficiency,
        tendencia_costo=trend,
    )


@pytest.fixture
def generator():
    return AlertGenerator(AlertThresholds())


class TestHighCostRule:
    """Test cost per egg against the configured maximum"""

    def test_normal_cost_no_alert(self, generator):
        assert generator.evaluate(make_daily(), make_analysis(), make_statistics()) == []

    def test_warning_above_maximum(self, generator):
        alerts = generator.evaluate(make_daily(eggs=10, spend="60.00"), make_analysis(), make_statistics(avg=10))

        assert [a.tipo for a in alerts] == [AlertKind.COSTO_ALTO]
        assert alerts[0].severidad == AlertSeverity.WARNING
        assert alerts[0].valor_actual == pytest.approx(6.0)
        assert alerts[0].valor_referencia == pytest.approx(5.0)

    def test_critical_well_above_maximum(self, generator):
        alerts = generator.evaluate(make_daily(eggs=10, spend="80.00"), make_analysis(), make_statistics(avg=10))

        assert alerts[0].tipo == AlertKind.COSTO_ALTO
        assert alerts[0].severidad == AlertSeverity.CRITICAL

    def test_no_data_day_never_alerts(self, generator):
        daily = make_daily(eggs=0, spend="900.00")
        assert generator.evaluate(daily, make_analysis(), make_statistics(avg=0)) == []


class TestLowProductionRule:
    """Test daily production against the window average"""

    def test_drop_below_floor(self, generator):
        alerts = generator.evaluate(make_daily(eggs=100, spend="20.00"), make_analysis(), make_statistics(avg=200))

        assert [a.tipo for a in alerts] == [AlertKind.BAJA_PRODUCCION]
        assert alerts[0].severidad == AlertSeverity.WARNING
        assert alerts[0].valor_referencia == pytest.approx(200.0)

    def test_small_drop_tolerated(self, generator):
        daily = make_daily(eggs=150, spend="30.00")
        assert generator.evaluate(daily, make_analysis(), make_statistics(avg=200)) == []

    def test_missing_record_is_not_a_drop(self, generator):
        daily = make_daily(eggs=0, spend="0", recorded=False)
        assert generator.evaluate(daily, make_analysis(), make_statistics(avg=200)) == []

    def test_silent_before_laying(self, generator):
        daily = make_daily(eggs=0, spend="0")
        assert generator.evaluate(daily, make_analysis(producing=False), make_statistics(avg=0)) == []


class TestInefficiencyRule:
    """Test efficiency against the configured minimum"""

    def test_warning_below_minimum(self):
        generator = AlertGenerator(AlertThresholds(eficiencia_minima=95.0))

        alerts = generator.evaluate(make_daily(eggs=180, spend="18.00"), make_analysis(),
                                    make_statistics(avg=180, efficiency=180 / 190 * 100))

        assert len(alerts) == 1
        assert alerts[0].tipo == AlertKind.INEFICIENCIA
        assert alerts[0].severidad == AlertSeverity.WARNING
        assert alerts[0].valor_actual == pytest.approx(94.737, rel=1e-4)

    def test_critical_far_below_minimum(self, generator):
        alerts = generator.evaluate(make_daily(eggs=60, spend="6.00"), make_analysis(),
                                    make_statistics(avg=60, efficiency=30.0))

        assert [a.severidad for a in alerts] == [AlertSeverity.CRITICAL]

    def test_unknown_efficiency_is_silent(self, generator):
        assert generator.evaluate(make_daily(), make_analysis(), make_statistics(efficiency=None)) == []


class TestExpenseIncreaseRule:
    """Test day-over-day spend"""

    def test_info_on_isolated_jump(self, generator):
        previous = make_daily(spend="40.00", fecha=date(2024, 3, 30))

        alerts = generator.evaluate(make_daily(spend="60.00"), make_analysis(), make_statistics(), previous)

        assert [a.tipo for a in alerts] == [AlertKind.INCREMENTO_GASTOS]
        assert alerts[0].severidad == AlertSeverity.INFO
        assert alerts[0].valor_actual == pytest.approx(60.0)
        assert alerts[0].valor_referencia == pytest.approx(40.0)

    def test_warning_when_trend_rising(self, generator):
        previous = make_daily(spend="40.00", fecha=date(2024, 3, 30))

        alerts = generator.evaluate(make_daily(spend="60.00"), make_analysis(),
                                    make_statistics(trend=CostTrend.INCREMENTO), previous)

        assert alerts[0].severidad == AlertSeverity.WARNING

    def test_zero_previous_spend_is_silent(self, generator):
        previous = make_daily(spend="0", fecha=date(2024, 3, 30))
        assert generator.evaluate(make_daily(), make_analysis(), make_statistics(), previous) == []


class TestAlertGenerator:
    def test_rules_can_co_occur(self, generator):
        previous = make_daily(spend="40.00", fecha=date(2024, 3, 30))
        current = make_daily(eggs=10, spend="80.00")

        alerts = generator.evaluate(current, make_analysis(), make_statistics(avg=200, efficiency=20.0), previous)

        assert [a.tipo for a in alerts] == [
            AlertKind.COSTO_ALTO,
            AlertKind.BAJA_PRODUCCION,
            AlertKind.INEFICIENCIA,
            AlertKind.INCREMENTO_GASTOS,
        ]
        assert all(a.fecha == DAY for a in alerts)

    def test_thresholds_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALERT_COSTO_MAXIMO_POR_HUEVO", "0.10")

        generator = AlertGenerator()
        alerts = generator.evaluate(make_daily(), make_analysis(), make_statistics())

        assert [a.tipo for a in alerts] == [AlertKind.COSTO_ALTO]
