"""
HTML Report Generator for the PT Floor System Optimizer

Generates a print-ready HTML report with:
- Summary page: optimal system, system cards, design parameters
- Cost page: cost breakdown per system and the span comparison table
- Assumptions page: loads, factors, stress limits and search diagnostics
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from jinja2 import Environment, BaseLoader, select_autoescape

from ..core.constants import (
    PARKING_LIVE_LOAD,
    WHEEL_LOAD,
    LOAD_FACTOR_DEAD,
    LOAD_FACTOR_LIVE,
    SERVICE_LIVE_LOAD_FRACTION,
    DEFLECTION_LIMIT_RATIO,
    CAMBER_LIMIT_RATIO,
    MIN_NATURAL_FREQUENCY,
    INFEASIBLE_UNIT_COST,
)
from ..core.data_models import (
    DesignResult,
    OptimizationResults,
    ProjectInput,
    StructuralSystem,
)


# =============================================================================
# SVG ICONS (Embedded)
# =============================================================================

SVG_ICONS = {
    'concrete': '''<svg viewBox="0 0 24 24" width="24" height="24" fill="currentColor">
        <path d="M19 3H5c-1.1 0-2 .9-2 2v14c0 1.1.9 2 2 2h14c1.1 0 2-.9 2-2V5c0-1.1-.9-2-2-2zm0 16H5V5h14v14z"/>
        <path d="M7 7h4v4H7zM13 7h4v4h-4zM7 13h4v4H7zM13 13h4v4h-4z" opacity="0.5"/>
    </svg>''',

    'strand': '''<svg viewBox="0 0 24 24" width="24" height="24" fill="currentColor">
        <path d="M2 12c3-4 5-4 8 0s5 4 8 0l2 1.5c-3.5 5-7 5-10.5 0S5 8.5 3.5 13.5z"/>
    </svg>''',

    'check': '''<svg viewBox="0 0 24 24" width="24" height="24" fill="currentColor">
        <path d="M12 2C6.48 2 2 6.48 2 12s4.48 10 10 10 10-4.48 10-10S17.52 2 12 2zm-2 15l-5-5 1.41-1.41L10 14.17l7.59-7.59L19 8l-9 9z"/>
    </svg>''',

    'error': '''<svg viewBox="0 0 24 24" width="24" height="24" fill="currentColor">
        <path d="M12 2C6.48 2 2 6.48 2 12s4.48 10 10 10 10-4.48 10-10S17.52 2 12 2zm1 15h-2v-2h2v2zm0-4h-2V7h2v6z"/>
    </svg>''',

    'ruler': '''<svg viewBox="0 0 24 24" width="24" height="24" fill="currentColor">
        <path d="M21 6H3c-1.1 0-2 .9-2 2v8c0 1.1.9 2 2 2h18c1.1 0 2-.9 2-2V8c0-1.1-.9-2-2-2zm0 10H3V8h2v4h2V8h2v4h2V8h2v4h2V8h2v4h2V8h2v8z"/>
    </svg>''',
}


# =============================================================================
# CSS STYLES
# =============================================================================

CSS_STYLES = '''
:root {
    --primary: #1a365d;
    --accent: #3182ce;
    --success: #38a169;
    --warning: #d69e2e;
    --danger: #e53e3e;
    --gray-100: #f7fafc;
    --gray-300: #e2e8f0;
    --gray-600: #718096;
    --gray-800: #2d3748;
}

* { box-sizing: border-box; margin: 0; padding: 0; }

body {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    color: var(--gray-800);
    background: var(--gray-100);
    font-size: 11pt;
    line-height: 1.5;
}

.page {
    max-width: 210mm;
    margin: 0 auto 24px auto;
    padding: 20mm;
    background: white;
    page-break-after: always;
}

.report-header {
    background: linear-gradient(135deg, var(--primary), var(--accent));
    color: white;
    padding: 24px;
    border-radius: 8px;
    margin-bottom: 24px;
}

.report-header h1 { font-size: 22pt; font-weight: 700; }
.report-header .subtitle { opacity: 0.85; }

.header-meta { display: grid; grid-template-columns: repeat(4, 1fr); gap: 12px; margin-top: 16px; }
.header-meta .label { font-size: 8pt; text-transform: uppercase; opacity: 0.75; }
.header-meta .value { font-weight: 600; }

.status-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; margin-bottom: 24px; }
.status-card { border-radius: 8px; padding: 16px; border-left: 4px solid var(--gray-300); background: var(--gray-100); }
.status-card.pass { border-left-color: var(--success); }
.status-card.warn { border-left-color: var(--warning); }
.status-card.fail { border-left-color: var(--danger); }
.status-card .element-name { font-weight: 600; }
.status-card .value { font-size: 16pt; font-weight: 700; }
.status-card .icon { width: 24px; height: 24px; }
.status-card.pass .icon { color: var(--success); }
.status-card.fail .icon { color: var(--danger); }

.section-title { font-size: 14pt; color: var(--primary); margin: 20px 0 10px 0; display: flex; gap: 8px; align-items: center; }

table { width: 100%; border-collapse: collapse; margin-bottom: 16px; font-size: 10pt; }
th { background: var(--primary); color: white; text-align: left; padding: 6px 8px; }
td { padding: 6px 8px; border-bottom: 1px solid var(--gray-300); }
td.number, th.number { text-align: right; font-variant-numeric: tabular-nums; }
tr.optimal td { font-weight: 600; background: #f0fff4; }
td.infeasible { color: var(--gray-600); }

.note { color: var(--gray-600); font-size: 9pt; }

@media print {
    body { background: white; }
    .page { margin: 0; box-shadow: none; }
}
'''


HTML_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ project.name }} - PT Floor System Optimization</title>
    <style>
{{ css_styles }}
    </style>
</head>
<body>

<!-- PAGE 1: SUMMARY -->
<div class="page" id="page-summary">

    <header class="report-header">
        <h1>{{ project.name }}</h1>
        <p class="subtitle">Post-Tensioned Floor System Optimization</p>
        <div class="header-meta">
            <div class="header-meta-item">
                <div class="label">Bay</div>
                <div class="value">{{ bay }}</div>
            </div>
            <div class="header-meta-item">
                <div class="label">Occupancy</div>
                <div class="value">{{ occupancy }}</div>
            </div>
            <div class="header-meta-item">
                <div class="label">Optimal System</div>
                <div class="value">{{ optimal_label }}</div>
            </div>
            <div class="header-meta-item">
                <div class="label">Date</div>
                <div class="value">{{ generation_date }}</div>
            </div>
        </div>
    </header>

    <div class="status-grid">
        {% for card in system_cards %}
        <div class="status-card {{ card.status_class }}">
            <div class="icon">{{ (icons.check if card.feasible else icons.error) | safe }}</div>
            <div class="element-name">{{ card.label }}</div>
            <div class="value">{{ card.unit_cost }}</div>
            <div class="note">{{ card.status_text }}</div>
        </div>
        {% endfor %}
    </div>

    <h2 class="section-title">
        <span class="icon">{{ icons.concrete | safe }}</span>
        Design Parameters
    </h2>

    <table>
        <thead>
            <tr>
                <th>System</th>
                <th class="number">Slab (in)</th>
                <th class="number">f'c (psi)</th>
                <th>Beam (in)</th>
                <th class="number">Balance</th>
                <th class="number">e (in)</th>
                <th class="number">P/A (psi)</th>
                <th class="number">Strands</th>
                <th class="number">Weight (psf)</th>
            </tr>
        </thead>
        <tbody>
            {% for row in design_rows %}
            <tr class="{{ 'optimal' if row.optimal else '' }}">
                <td>{{ row.label }}</td>
                {% if row.feasible %}
                <td class="number">{{ row.thickness }}</td>
                <td class="number">{{ row.concrete_strength }}</td>
                <td>{{ row.beam }}</td>
                <td class="number">{{ row.balance_ratio }}</td>
                <td class="number">{{ row.eccentricity }}</td>
                <td class="number">{{ row.avg_prestress }}</td>
                <td class="number">{{ row.num_strands }}</td>
                <td class="number">{{ row.weight_per_sf }}</td>
                {% else %}
                <td class="infeasible" colspan="8">No feasible design</td>
                {% endif %}
            </tr>
            {% endfor %}
        </tbody>
    </table>

    <h2 class="section-title">
        <span class="icon">{{ icons.strand | safe }}</span>
        Mild Steel
    </h2>

    <table>
        <thead>
            <tr>
                <th>System</th>
                <th>Governing Case</th>
                <th class="number">As (in²/ft)</th>
                <th class="number">Weight (psf)</th>
            </tr>
        </thead>
        <tbody>
            {% for row in design_rows if row.feasible %}
            <tr>
                <td>{{ row.label }}</td>
                <td>{{ row.steel_case }}</td>
                <td class="number">{{ row.steel_area }}</td>
                <td class="number">{{ row.steel_weight }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>
</div>

<!-- PAGE 2: COSTS -->
<div class="page" id="page-costs">

    <h2 class="section-title">
        <span class="icon">{{ icons.ruler | safe }}</span>
        Cost Breakdown ($ per bay)
    </h2>

    <table>
        <thead>
            <tr>
                <th>System</th>
                <th class="number">Concrete</th>
                <th class="number">Formwork</th>
                <th class="number">Beam Forming</th>
                <th class="number">Beam Pouring</th>
                <th class="number">PT Strand</th>
                <th class="number">Mild Steel</th>
                <th class="number">Total</th>
            </tr>
        </thead>
        <tbody>
            {% for row in cost_rows %}
            <tr class="{{ 'optimal' if row.optimal else '' }}">
                <td>{{ row.label }}</td>
                {% for value in row.cells %}
                <td class="number">{{ value }}</td>
                {% endfor %}
            </tr>
            {% endfor %}
        </tbody>
    </table>

    <h2 class="section-title">Span Comparison ($/sf, bay width {{ project.bay_width }} ft)</h2>

    {% if comparison_rows %}
    <table>
        <thead>
            <tr>
                <th class="number">Span (ft)</th>
                <th class="number">Flat Plate</th>
                <th class="number">One-Way Beam</th>
                <th class="number">Two-Way Beam</th>
            </tr>
        </thead>
        <tbody>
            {% for row in comparison_rows %}
            <tr>
                <td class="number">{{ row.span }}</td>
                {% for value in row.cells %}
                <td class="number {{ 'infeasible' if value == '—' else '' }}">{{ value }}</td>
                {% endfor %}
            </tr>
            {% endfor %}
        </tbody>
    </table>
    <p class="note">— : no feasible design at this span</p>
    {% else %}
    <p class="note">No comparison spans were evaluated.</p>
    {% endif %}
</div>

<!-- PAGE 3: ASSUMPTIONS -->
<div class="page" id="page-assumptions">

    <h2 class="section-title">Basis of Design</h2>

    <table>
        <tbody>
            {% for item in assumptions %}
            <tr>
                <td>{{ item.label }}</td>
                <td>{{ item.value }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>

    <h2 class="section-title">Search Diagnostics</h2>

    <table>
        <thead>
            <tr>
                <th>System</th>
                <th class="number">Evaluated</th>
                <th class="number">Feasible</th>
                <th>Rejections</th>
                <th class="number">Time (s)</th>
            </tr>
        </thead>
        <tbody>
            {% for row in diagnostics %}
            <tr>
                <td>{{ row.label }}{% if row.truncated %} (stopped early){% endif %}</td>
                <td class="number">{{ row.evaluated }}</td>
                <td class="number">{{ row.feasible }}</td>
                <td>{{ row.failures }}</td>
                <td class="number">{{ row.elapsed }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>
</div>

</body>
</html>
'''


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _unit_cost(value: float) -> str:
    if value >= INFEASIBLE_UNIT_COST:
        return "—"
    return f"${value:.2f}"


class ReportGenerator:
    """
    HTML report for one optimization run.

    - Page 1: Summary (system cards, design parameters, mild steel)
    - Page 2: Costs (breakdown per system, span comparison)
    - Page 3: Assumptions (basis of design, search diagnostics)
    """

    def __init__(self, project: ProjectInput, results: OptimizationResults):
        """Initialize with the project and its results."""
        self.project = project
        self.results = results
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.template = self.env.from_string(HTML_TEMPLATE)

    def _get_status_class(self, system: StructuralSystem) -> str:
        """Return CSS class: optimal, feasible or infeasible."""
        if self.results.optimal_system == system.value:
            return "pass"
        if self.results.result_for(system) is not None:
            return "warn"
        return "fail"

    def _get_status_text(self, system: StructuralSystem) -> str:
        if self.results.optimal_system == system.value:
            return "OPTIMAL"
        if self.results.result_for(system) is not None:
            return "FEASIBLE"
        return "NOT FEASIBLE"

    def _build_system_cards(self) -> List[Dict[str, Any]]:
        cards = []
        for system in StructuralSystem:
            result = self.results.result_for(system)
            cards.append({
                'label': system.label,
                'feasible': result is not None,
                'status_class': self._get_status_class(system),
                'status_text': self._get_status_text(system),
                'unit_cost': (
                    f"${result.total_cost / self.project.plan_area:.2f}/sf" if result else "—"
                ),
            })
        return cards

    def _build_design_row(self, system: StructuralSystem, result: Optional[DesignResult]) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            'label': system.label,
            'feasible': result is not None,
            'optimal': self.results.optimal_system == system.value,
        }
        if result is None:
            return row

        beam = "—"
        if result.beam_width is not None:
            beam = f"{result.beam_width:.0f} x {result.beam_depth:.1f}"
        row.update({
            'thickness': f"{result.slab_thickness:.1f}",
            'concrete_strength': f"{result.concrete_strength:,.0f}",
            'beam': beam,
            'balance_ratio': f"{result.balance_ratio:.2f}",
            'eccentricity': f"{result.eccentricity:.2f}",
            'avg_prestress': f"{result.avg_prestress:.0f}",
            'num_strands': result.num_strands,
            'weight_per_sf': f"{result.weight_per_sf:.1f}",
            'steel_case': result.mild_steel.governing_case,
            'steel_area': f"{result.mild_steel.area:.3f}",
            'steel_weight': f"{result.mild_steel.weight_per_sf:.2f}",
        })
        return row

    def _build_cost_rows(self) -> List[Dict[str, Any]]:
        rows = []
        for system in StructuralSystem:
            result = self.results.result_for(system)
            if result is None:
                continue
            cost = result.cost
            rows.append({
                'label': system.label,
                'optimal': self.results.optimal_system == system.value,
                'cells': [
                    _money(cost.concrete),
                    _money(cost.formwork),
                    _money(cost.beam_forming),
                    _money(cost.beam_pouring),
                    _money(cost.pt_strand),
                    _money(cost.mild_steel),
                    _money(cost.total),
                ],
            })
        return rows

    def _build_comparison_rows(self) -> List[Dict[str, Any]]:
        return [
            {
                'span': f"{row.span:g}",
                'cells': [
                    _unit_cost(row.flat_plate_cost),
                    _unit_cost(row.one_way_beam_cost),
                    _unit_cost(row.two_way_beam_cost),
                ],
            }
            for row in self.results.comparisons
        ]

    def _build_assumptions(self) -> List[Dict[str, str]]:
        occupancy = self.project.occupancy
        return [
            {'label': 'Design code', 'value': 'ACI 318-19, ACI 362.1R (parking structures)'},
            {'label': 'Live load', 'value': f'{PARKING_LIVE_LOAD:.0f} psf, {WHEEL_LOAD:,.0f} lb wheel load'},
            {'label': 'Strength combination', 'value': f'{LOAD_FACTOR_DEAD}D + {LOAD_FACTOR_LIVE}L'},
            {'label': 'Service stress combination', 'value': f'D + {SERVICE_LIVE_LOAD_FRACTION}L'},
            {'label': 'Deflection limit', 'value': f'L/{DEFLECTION_LIMIT_RATIO} net, camber L/{CAMBER_LIMIT_RATIO}'},
            {'label': 'Natural frequency', 'value': f'≥ {MIN_NATURAL_FREQUENCY:.1f} Hz'},
            {'label': 'Minimum average prestress', 'value': f'{occupancy.min_avg_prestress:.0f} psi'},
            {'label': 'Prestressing steel', 'value': 'Grade 270 low-relaxation 0.5 in strand, unbonded'},
            {'label': 'Mild steel', 'value': 'Grade 60, #4 bars'},
        ]

    def _build_diagnostics(self) -> List[Dict[str, Any]]:
        rows = []
        for system in StructuralSystem:
            diag = self.results.diagnostics.get(system.value)
            if diag is None:
                continue
            failures = ", ".join(
                f"{name.replace('_', ' ')}: {count}" for name, count in sorted(diag.failures.items())
            )
            rows.append({
                'label': system.label,
                'evaluated': diag.evaluated,
                'feasible': diag.feasible,
                'failures': failures or "—",
                'elapsed': f"{diag.elapsed:.2f}",
                'truncated': diag.truncated,
            })
        return rows

    def generate(self) -> str:
        """
        Generate the complete HTML report.

        Returns:
            Complete HTML string ready for rendering or saving
        """
        optimal = self.results.optimal_system
        optimal_label = (
            StructuralSystem(optimal).label if self.results.has_feasible_design
            else "No feasible system"
        )

        context = {
            'project': self.project,
            'css_styles': CSS_STYLES,
            'icons': SVG_ICONS,
            'bay': f"{self.project.bay_length:g} x {self.project.bay_width:g} ft",
            'occupancy': self.project.occupancy.value.title(),
            'optimal_label': optimal_label,
            'system_cards': self._build_system_cards(),
            'design_rows': [
                self._build_design_row(system, self.results.result_for(system))
                for system in StructuralSystem
            ],
            'cost_rows': self._build_cost_rows(),
            'comparison_rows': self._build_comparison_rows(),
            'assumptions': self._build_assumptions(),
            'diagnostics': self._build_diagnostics(),
            'generation_date': datetime.now().strftime('%Y-%m-%d %H:%M'),
        }

        return self.template.render(**context)

    def save(self, filepath: str) -> str:
        """
        Generate and save the HTML report to a file.

        Returns:
            The filepath where the report was saved
        """
        html = self.generate()

        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(html)

        return filepath


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def generate_report(
    project: ProjectInput,
    results: OptimizationResults,
    filepath: Optional[str] = None,
) -> str:
    """
    Convenience function to generate a report.

    Returns:
        HTML string if no filepath, otherwise the saved filepath
    """
    generator = ReportGenerator(project, results)

    if filepath:
        return generator.save(filepath)
    return generator.generate()
