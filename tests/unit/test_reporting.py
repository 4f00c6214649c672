"""
Unit tests for the cost report and lot ranking
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from egg_costing.config.settings import AnalysisConfig, Settings
from egg_costing.container import Container
from egg_costing.exceptions import InvalidLotStateError, LotNotFoundError
from egg_costing.models import AlertKind, RearingCosts
from egg_costing.repositories.memory import InMemoryExpenseLedger, InMemoryLotRegistry, InMemoryProductionLedger
from egg_costing.services.reporting import build_projections

from conftest import LOT_ID, TODAY, daily_expenses, daily_production, expense, make_lot, production


class FailingRegistry(InMemoryLotRegistry):
    """Lot registry whose listing endpoint is down."""

    def list_active_lots(self):
        raise ConnectionError("registry listing unavailable")


class TestCompileReport:
    """Test the assembled report"""

    def test_report_sections(self, producing_lot_container):
        report = producing_lot_container.get_engine().compile_report(LOT_ID)

        assert report.lote_id == LOT_ID
        assert report.nombre_lote == "Lote lote-1"
        assert report.fecha_generacion == TODAY
        assert report.costo_diario.costo_por_huevo == Decimal("0.20")
        assert report.analisis_por_fases.fase_inicial.costo_unitario == Decimal("15.00")
        assert report.estadisticas_rendimiento.huevos_totales == 6000
        assert report.alertas == report.estadisticas_rendimiento.alertas
        assert report.desglose_costos.costo_total_lote == Decimal("2700.00")
        assert report.punto_equilibrio is None
        assert report.proyecciones_futuras.dias == 30
        assert report.resumen_ejecutivo.recomendacion_principal == (
            "El lote está funcionando dentro de parámetros normales"
        )

    def test_report_is_idempotent(self, producing_lot_container):
        engine = producing_lot_container.get_engine()
        assert engine.compile_report(LOT_ID).to_dict() == engine.compile_report(LOT_ID).to_dict()

    def test_report_serializes_camel_case(self, producing_lot_container):
        data = producing_lot_container.get_engine().compile_report(LOT_ID).to_dict()

        assert data["costoDiario"]["costoPorHuevo"] == "0.20"
        assert data["analisisPorFases"]["faseInicial"]["costoUnitario"] == "15.00"
        assert data["fechaGeneracion"] == TODAY.isoformat()

    def test_lot_without_production(self, build_container):
        container = build_container(lots=[make_lot()], expenses=[expense(date(2023, 11, 1), "800.00")])

        report = container.get_engine().compile_report(LOT_ID)

        assert report.analisis_por_fases.fase_productiva is None
        assert report.analisis_por_fases.fase_inicial.costo_total == Decimal("800.00")
        assert report.costo_diario.costo_por_huevo is None
        assert report.alertas == ()
        assert report.desglose_costos.porcentaje_levante == pytest.approx(100.0)
        assert report.resumen_ejecutivo.recomendacion_principal.startswith("El lote aún no inicia postura")

    def test_report_carries_alerts(self, build_container):
        container = build_container(
            lots=[make_lot()],
            expenses=daily_expenses(TODAY, 10, "40.00") + [expense(TODAY, "600.00")],
            entries=daily_production(TODAY, 10, 100),
        )

        report = container.get_engine().compile_report(LOT_ID)

        kinds = [a.tipo for a in report.alertas]
        assert AlertKind.COSTO_ALTO in kinds
        assert AlertKind.INCREMENTO_GASTOS in kinds
        assert report.resumen_ejecutivo.recomendacion_principal.startswith("Se recomienda revisar los costos")

    def test_unknown_lot(self, producing_lot_container):
        with pytest.raises(LotNotFoundError):
            producing_lot_container.get_engine().compile_report("lote-x")

    def test_invalid_lot(self, build_container):
        container = build_container(lots=[make_lot(cantidad_inicial=-5, cantidad_actual=0)])

        with pytest.raises(InvalidLotStateError):
            container.get_engine().compile_report(LOT_ID)


class TestPriceDrivenSections:
    """Test break-even, projections and recommendations at a configured egg price"""

    @pytest.fixture
    def priced_settings(self):
        return Settings(analysis=AnalysisConfig(precio_venta_huevo=Decimal("0.30"), ranking_enabled=False))

    def test_break_even_not_reached(self, build_container, priced_settings):
        container = build_container(
            lots=[make_lot()],
            expenses=[expense(date(2023, 11, 1), "1500.00")] + daily_expenses(TODAY, 5, "20.00"),
            entries=daily_production(TODAY, 5, 100),
            settings=priced_settings,
        )

        report = container.get_engine().compile_report(LOT_ID)

        point = report.punto_equilibrio
        assert point.huevos_necesarios == 5000
        assert point.huevos_producidos == 500
        assert not point.alcanzado
        assert any("4500 huevos" in r for r in report.recomendaciones)
        assert any("levante" in r for r in report.recomendaciones)
        assert report.comparativa_con_otros_lotes is None

    def test_cost_above_price_recommendation(self, build_container, priced_settings):
        container = build_container(
            lots=[make_lot()],
            expenses=daily_expenses(TODAY, 5, "50.00"),
            entries=daily_production(TODAY, 5, 100),
            settings=priced_settings,
        )

        report = container.get_engine().compile_report(LOT_ID)

        assert any("mayor al precio de venta" in r for r in report.recomendaciones)

    def test_high_rearing_share_on_transferred_lot(self, build_container, priced_settings):
        lot = make_lot(costos_levante=RearingCosts(total=Decimal("3000.00"), por_ave=Decimal("30.00")))
        container = build_container(
            lots=[lot],
            expenses=daily_expenses(TODAY, 5, "20.00"),
            entries=daily_production(TODAY, 5, 100),
            settings=priced_settings,
        )

        report = container.get_engine().compile_report(LOT_ID)

        assert report.desglose_costos.porcentaje_levante > 60
        assert any("fase de levante" in r for r in report.recomendaciones)

    def test_old_flock_recommendation(self, build_container, priced_settings):
        born = TODAY - timedelta(weeks=90)
        lot = make_lot(fecha_nacimiento=born, fecha_inicio=born)
        container = build_container(lots=[lot], entries=daily_production(TODAY, 5, 100), settings=priced_settings)

        report = container.get_engine().compile_report(LOT_ID)

        assert any("80 semanas" in r for r in report.recomendaciones)

    def test_projections(self, producing_lot_container):
        stats = producing_lot_container.get_engine().compute_statistics(LOT_ID)

        projection = build_projections(stats, 10, Decimal("0.50"))

        assert projection.costos_estimados == Decimal("400")
        assert projection.huevos_estimados == pytest.approx(2000.0)
        assert projection.rentabilidad_estimada == pytest.approx(150.0)

    def test_projections_without_price(self, producing_lot_container):
        stats = producing_lot_container.get_engine().compute_statistics(LOT_ID)
        assert build_projections(stats, 10).rentabilidad_estimada is None


class TestRanking:
    """Test ranking against other active lots"""

    @pytest.fixture
    def three_lots(self, build_container):
        lots = [make_lot("lote-1"), make_lot("lote-2"), make_lot("lote-3")]
        expenses, entries = [], []
        for lot_id, spend in (("lote-1", "40.00"), ("lote-2", "20.00"), ("lote-3", "60.00")):
            expenses += daily_expenses(TODAY, 10, spend, lot_id)
            entries += daily_production(TODAY, 10, 200, lot_id)
        return build_container(lots=lots, expenses=expenses, entries=entries)

    def test_position_and_best(self, three_lots):
        ranking = three_lots.get_engine().compute_ranking("lote-1")

        assert ranking.posicion_ranking == 2
        assert ranking.total_lotes == 3
        assert ranking.mejor_lote.lote_id == "lote-2"
        assert ranking.mejor_lote.costo_por_huevo == Decimal("0.1")
        assert ranking.promedio_general == Decimal("0.2")

    def test_report_includes_ranking(self, three_lots):
        report = three_lots.get_engine().compile_report("lote-3", include_ranking=True)
        assert report.comparativa_con_otros_lotes.posicion_ranking == 3

    def test_report_ranking_off_by_default(self, three_lots):
        report = three_lots.get_engine().compile_report("lote-3")
        assert report.comparativa_con_otros_lotes is None

    def test_report_ranking_can_be_skipped(self, three_lots):
        report = three_lots.get_engine().compile_report("lote-3", include_ranking=False)
        assert report.comparativa_con_otros_lotes is None

    def test_lots_without_production_not_ranked(self, build_container):
        container = build_container(
            lots=[make_lot("lote-1"), make_lot("lote-2")],
            expenses=daily_expenses(TODAY, 3, "30.00", "lote-1"),
            entries=daily_production(TODAY, 3, 100, "lote-1"),
        )

        ranking = container.get_engine().compute_ranking("lote-2")

        assert ranking.total_lotes == 1
        assert ranking.posicion_ranking is None

    def test_invalid_lots_are_skipped(self, build_container):
        container = build_container(
            lots=[make_lot("lote-1"), make_lot("lote-2", cantidad_inicial=0, cantidad_actual=0)],
            entries=daily_production(TODAY, 3, 100, "lote-1") + daily_production(TODAY, 3, 100, "lote-2"),
        )

        ranking = container.get_engine().compute_ranking("lote-1")

        assert ranking.total_lotes == 1
        assert ranking.posicion_ranking == 1

    def test_no_rankable_lots(self, build_container):
        container = build_container(lots=[make_lot()])

        ranking = container.get_engine().compute_ranking(LOT_ID)

        assert ranking.total_lotes == 0
        assert ranking.mejor_lote is None

    def test_registry_outage_omits_ranking(self, test_settings):
        container = Container()
        container.configure(
            FailingRegistry([make_lot()]),
            InMemoryExpenseLedger(daily_expenses(TODAY, 3, "30.00")),
            InMemoryProductionLedger(daily_production(TODAY, 3, 100)),
            settings=test_settings,
            clock=lambda: TODAY,
        )

        report = container.get_engine().compile_report(LOT_ID, include_ranking=True)

        assert report.comparativa_con_otros_lotes is None
        assert report.costo_diario.costo_por_huevo == Decimal("0.30")

    def test_ledger_outage_for_another_lot_skips_it(self, test_settings):
        class PartlyFailingLedger(InMemoryExpenseLedger):
            def get_expenses(self, lot_id, date_range):
                if lot_id == "lote-2":
                    raise ConnectionError("ledger down")
                return super().get_expenses(lot_id, date_range)

        container = Container()
        container.configure(
            InMemoryLotRegistry([make_lot("lote-1"), make_lot("lote-2")]),
            PartlyFailingLedger(daily_expenses(TODAY, 3, "30.00", "lote-1") + daily_expenses(TODAY, 3, "30.00", "lote-2")),
            InMemoryProductionLedger(daily_production(TODAY, 3, 100, "lote-1") + daily_production(TODAY, 3, 100, "lote-2")),
            settings=test_settings,
            clock=lambda: TODAY,
        )

        report = container.get_engine().compile_report("lote-1", include_ranking=True)

        ranking = report.comparativa_con_otros_lotes
        assert ranking.total_lotes == 1
        assert ranking.posicion_ranking == 1
        assert report.costo_diario.costo_por_huevo == Decimal("0.30")

    def test_ranking_enabled_by_setting(self, build_container):
        settings = Settings(analysis=AnalysisConfig(ranking_enabled=True))
        container = build_container(
            lots=[make_lot()],
            expenses=daily_expenses(TODAY, 3, "30.00"),
            entries=daily_production(TODAY, 3, 100),
            settings=settings,
        )

        report = container.get_engine().compile_report(LOT_ID)

        assert report.comparativa_con_otros_lotes.posicion_ranking == 1
