"""Tests for paint system selection and the blasting and paint rows."""

from __future__ import annotations

import logging

import pytest

from quickest.bom_builder import BomBuilder
from quickest.data.store import ReferenceStore
from quickest.paint import (
    NO_PAINT,
    PAINT_SYSTEMS,
    add_paint_rows,
    paint_system,
    painted_area,
)


class TestPaintSystem:
    @pytest.mark.parametrize(
        ("name", "code"),
        [
            ("Primer Only", "PaintPO"),
            ("Primer + Finish", "PaintPF"),
            ("Primer + Intermediate + Finish", "PaintPIF"),
            (" Epoxy ", "PaintEP"),
        ],
    )
    def test_known_systems(self, name: str, code: str) -> None:
        system = paint_system(name)
        assert system.paint_code == code
        assert system.blast_code == "Blast"
        assert system.is_painted

    def test_none(self) -> None:
        assert paint_system("None") is NO_PAINT
        assert not NO_PAINT.is_painted

    def test_galvanized_built_up_steel_is_not_painted(self) -> None:
        assert paint_system("Epoxy", bu_finish="Galvanized") is NO_PAINT
        assert paint_system("Epoxy", bu_finish="Red Oxide Primer").paint_code == "PaintEP"

    def test_unknown_name_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="quickest.paint"):
            system = paint_system("Glitter")
        assert system == PAINT_SYSTEMS["Primer Only"]
        assert "Glitter" in caplog.text

    def test_rates_rise_with_coats(self, store: ReferenceStore) -> None:
        rates = [
            store.price(PAINT_SYSTEMS[name].paint_code or "")
            for name in (
                "Primer Only",
                "Primer + Finish",
                "Primer + Intermediate + Finish",
                "Epoxy",
            )
        ]
        assert rates == sorted(rates)
        assert rates == pytest.approx([1.0, 3.54, 5.0, 8.0])


class TestPaintRows:
    def test_rows(self, store: ReferenceStore) -> None:
        builder = BomBuilder(store)
        builder.add("BU", 1, 1000)
        area = painted_area(builder.data_rows)
        assert area == pytest.approx(35)

        add_paint_rows(builder, area, PAINT_SYSTEMS["Primer + Finish"])
        blast, paint = builder.data_rows[1:]
        assert (blast.code, blast.quantity, blast.description) == ("Blast", 35, "Blasting")
        assert paint.code == "PaintPF"
        assert paint.description == "Paint System - Primer + Finish"
        assert paint.total_price == pytest.approx(35 * 3.54)

    def test_area_is_rounded(self, store: ReferenceStore) -> None:
        builder = BomBuilder(store)
        add_paint_rows(builder, 10.004, PAINT_SYSTEMS["Primer Only"])
        assert [row.quantity for row in builder.data_rows] == [10.0, 10.0]

    @pytest.mark.parametrize("area", [0.0, -3.0])
    def test_no_area_no_rows(self, store: ReferenceStore, area: float) -> None:
        builder = BomBuilder(store)
        add_paint_rows(builder, area, PAINT_SYSTEMS["Epoxy"])
        assert builder.data_rows == []

    def test_unpainted_system_adds_nothing(self, store: ReferenceStore) -> None:
        builder = BomBuilder(store)
        add_paint_rows(builder, 50, NO_PAINT)
        assert builder.data_rows == []

    def test_unpriced_code_is_skipped(self) -> None:
        store = ReferenceStore.from_records([])
        builder = BomBuilder(store)
        add_paint_rows(builder, 50, PAINT_SYSTEMS["Primer Only"])
        assert builder.data_rows == []
