"""
Tests for the HTML Report Generator

Tests cover:
- Report generation for feasible and infeasible results
- Status classes per system
- Comparison table sentinel rendering
- Saving to file
"""

import pytest

from src.core.data_models import OptimizationResults, ProjectInput, StructuralSystem
from src.report.report_generator import SVG_ICONS, ReportGenerator, generate_report


@pytest.fixture
def project():
    return ProjectInput(bay_length=30.0, bay_width=30.0, name="Main Street Garage")


class TestReportGenerator:
    def test_generates_html(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert html.startswith("<!DOCTYPE html>")
        assert "Main Street Garage" in html
        assert "30 x 30 ft" in html
        assert "Flat Plate" in html
        assert "One-Way Beam &amp; Slab" in html

    def test_status_classes(self, project, sample_results):
        generator = ReportGenerator(project, sample_results)
        assert generator._get_status_class(StructuralSystem.FLAT_PLATE) == "pass"
        assert generator._get_status_class(StructuralSystem.ONE_WAY_BEAM) == "fail"

    def test_feasible_not_optimal_is_warn(self, project, sample_results):
        from conftest import make_design
        results = OptimizationResults(
            flat_plate=sample_results.flat_plate,
            two_way_beam=make_design(StructuralSystem.TWO_WAY_BEAM, concrete=30000.0),
            optimal_system="flat_plate",
        )
        generator = ReportGenerator(project, results)
        assert generator._get_status_class(StructuralSystem.TWO_WAY_BEAM) == "warn"

    def test_infeasible_spans_shown_as_dash(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert "999" not in html
        assert "—" in html

    def test_table_cells_rendered(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert "$23.10" in html
        assert "$4,050" in html

    def test_cost_breakdown(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert "$12,600" in html
        assert "two-way negative moment" in html

    def test_diagnostics_section(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert "stress service: 8" in html
        assert "(stopped early)" in html

    def test_no_feasible_system(self, project):
        html = ReportGenerator(project, OptimizationResults()).generate()
        assert "No feasible system" in html
        assert "NOT FEASIBLE" in html

    def test_icons_embedded(self, project, sample_results):
        html = ReportGenerator(project, sample_results).generate()
        assert SVG_ICONS["check"].strip()[:20] in html


class TestGenerateReport:
    def test_returns_html_without_path(self, project, sample_results):
        html = generate_report(project, sample_results)
        assert "<html" in html

    def test_save(self, project, sample_results, tmp_path):
        target = tmp_path / "report.html"
        path = generate_report(project, sample_results, str(target))
        assert path == str(target)
        content = target.read_text(encoding="utf-8")
        assert "Main Street Garage" in content
