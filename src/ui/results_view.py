"""Tables and charts for optimization results."""

from typing import List, Optional

import pandas as pd
import plotly.graph_objects as go

from src.core.constants import INFEASIBLE_UNIT_COST
from src.core.data_models import OptimizationResults, ProjectInput, StructuralSystem
from src.ui.theme import SYSTEM_COLORS


def get_status_badge(results: OptimizationResults, system: StructuralSystem) -> str:
    """HTML badge for a system: optimal, feasible or not feasible."""
    if results.optimal_system == system.value:
        return '<span class="status-pass">OPTIMAL</span>'
    if results.result_for(system) is not None:
        return '<span class="status-warning">FEASIBLE</span>'
    return '<span class="status-fail">NOT FEASIBLE</span>'


def design_table(results: OptimizationResults, project: ProjectInput) -> pd.DataFrame:
    """One row per system with the selected design parameters.

    Infeasible systems keep their row with empty values so the table always
    lists all three systems in the same order.
    """
    rows = []
    for system in StructuralSystem:
        result = results.result_for(system)
        row = {"System": system.label}
        if result is not None:
            row.update({
                "Slab (in)": result.slab_thickness,
                "f'c (psi)": result.concrete_strength,
                "Beam b (in)": result.beam_width,
                "Beam h (in)": result.beam_depth,
                "Balance": result.balance_ratio,
                "e (in)": round(result.eccentricity, 3),
                "Pe (lb/ft)": round(result.prestress_force),
                "P/A (psi)": round(result.avg_prestress, 1),
                "Strands": result.num_strands,
                "Mild steel": result.mild_steel.governing_case,
                "Total ($)": round(result.total_cost, 2),
                "$/sf": round(result.total_cost / project.plan_area, 2),
            })
        rows.append(row)
    return pd.DataFrame(rows).set_index("System")


def cost_table(results: OptimizationResults) -> pd.DataFrame:
    """Cost breakdown ($ per bay) for the feasible systems."""
    rows = []
    for system in StructuralSystem:
        result = results.result_for(system)
        if result is None:
            continue
        row = {"System": system.label}
        row.update({
            name.replace("_", " ").title(): round(value, 2)
            for name, value in result.cost.to_dict().items()
        })
        rows.append(row)
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).set_index("System")


def comparison_table(results: OptimizationResults) -> pd.DataFrame:
    """Span comparison with the infeasible sentinel replaced by NaN."""
    frame = results.comparison_frame()
    frame = frame.mask(frame >= INFEASIBLE_UNIT_COST)
    frame.columns = [system.label for system in StructuralSystem]
    frame.index.name = "Span (ft)"
    return frame


def create_comparison_chart(results: OptimizationResults, bay_length: Optional[float] = None) -> go.Figure:
    """Unit cost vs span for each system; infeasible spans leave gaps."""
    frame = comparison_table(results)
    fig = go.Figure()

    for system in StructuralSystem:
        series = frame[system.label]
        fig.add_trace(go.Scatter(
            x=list(frame.index),
            y=[None if pd.isna(v) else v for v in series],
            mode="lines+markers",
            name=system.label,
            line=dict(color=SYSTEM_COLORS[system], width=2),
            connectgaps=False,
            hovertemplate="%{x} ft: $%{y:.2f}/sf<extra>" + system.label + "</extra>",
        ))

    if bay_length is not None:
        fig.add_vline(x=bay_length, line_dash="dash", line_color="#94A3B8")

    fig.update_layout(
        title=dict(text="Unit Cost by Span", font=dict(size=16, color="#1E3A5F")),
        xaxis=dict(title="Span (ft)"),
        yaxis=dict(title="Cost ($/sf)"),
        legend=dict(orientation="h", yanchor="top", y=-0.2, xanchor="center", x=0.5),
        height=420,
        margin=dict(l=40, r=40, t=60, b=100),
    )
    return fig


def check_summary(results: OptimizationResults) -> List[str]:
    """Lines describing why systems were rejected, for the diagnostics panel."""
    lines = []
    for system in StructuralSystem:
        diag = results.diagnostics.get(system.value)
        if diag is None:
            continue
        line = f"{system.label}: {diag.evaluated} evaluated, {diag.feasible} feasible"
        if diag.failures:
            worst = max(diag.failures.items(), key=lambda item: item[1])
            line += f", most rejections from {worst[0].replace('_', ' ')} ({worst[1]})"
        if diag.truncated:
            line += " (search stopped early)"
        lines.append(line)
    return lines
