"""
PT Optimizer - Streamlit Dashboard
Post-Tensioned Parking Structure Floor System Optimization
"""

import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from src.core.config import EngineConfig
from src.core.cost_tables import DEFAULT_PT_SLAB_COSTS, DEFAULT_UNIT_COSTS
from src.core.data_models import (
    CostParameters,
    CostTableError,
    InputError,
    Occupancy,
    ProjectInput,
    SlabCostPoint,
    StructuralSystem,
)
from src.report.report_generator import ReportGenerator
from src.store.project_store import JsonProjectStore, ProjectNotFoundError, optimize
from src.ui.results_view import (
    check_summary,
    comparison_table,
    cost_table,
    create_comparison_chart,
    design_table,
    get_status_badge,
)
from src.ui.theme import apply_theme, metric_card

logger = logging.getLogger(__name__)


# Page Configuration
st.set_page_config(
    page_title="PT Optimizer | Parking Structures",
    page_icon="🏗️",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_config() -> EngineConfig:
    config = EngineConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return config


@st.cache_resource
def get_store(store_dir: str) -> JsonProjectStore:
    return JsonProjectStore(store_dir)


def render_project_inputs() -> ProjectInput:
    st.markdown("##### Bay Geometry")
    name = st.text_input("Project Name", value="Untitled Project")
    col1, col2 = st.columns(2)
    with col1:
        bay_length = st.number_input("Bay Length (ft)", min_value=10.0, max_value=80.0,
                                     value=30.0, step=1.0,
                                     help="Flat plate span and beam span")
    with col2:
        bay_width = st.number_input("Bay Width (ft)", min_value=10.0, max_value=80.0,
                                    value=30.0, step=1.0,
                                    help="Slab span of the beam systems")

    occupancy_label = st.selectbox(
        "Occupancy",
        options=["Parking (ACI 362.1R)", "General (ACI 318)"],
        help="Sets the minimum average precompression: 175 psi parking, 125 psi general",
    )
    occupancy = Occupancy.PARKING if occupancy_label.startswith("Parking") else Occupancy.GENERAL

    return ProjectInput(bay_length=bay_length, bay_width=bay_width, name=name, occupancy=occupancy)


def render_cost_inputs() -> CostParameters:
    st.markdown("##### Unit Costs")
    costs = {}
    labels = {
        "pt_formwork_cost_per_sf": "PT Formwork ($/sf)",
        "beam_forming_cost_per_cf": "Beam Forming ($/cf)",
        "beam_pouring_cost_per_cf": "Beam Pouring ($/cf)",
        "pt_strand_cost_per_lb": "PT Strand ($/lb)",
        "mild_steel_cost_per_lb": "Mild Steel ($/lb)",
        "concrete_cost_per_cy": "Concrete ($/cy)",
    }
    for key, label in labels.items():
        costs[key] = st.number_input(label, min_value=0.0, value=float(DEFAULT_UNIT_COSTS[key]), step=0.05)

    st.markdown("##### PT Slab Cost Table")
    table = st.data_editor(
        pd.DataFrame(DEFAULT_PT_SLAB_COSTS, columns=["Thickness (in)", "Cost ($/sf)"]),
        num_rows="dynamic",
        hide_index=True,
    )
    points = tuple(
        SlabCostPoint(float(row["Thickness (in)"]), float(row["Cost ($/sf)"]))
        for _, row in table.dropna().iterrows()
    )
    return CostParameters(pt_slab_costs=points, **costs)


def render_results(record) -> None:
    results = record.results
    project = record.project

    st.markdown("### Optimal System")
    optimal = results.optimal_result
    col1, col2, col3 = st.columns(3)
    if optimal is None:
        st.error("No system produced a feasible design for this bay. "
                 "Check the diagnostics below for the governing checks.")
    else:
        with col1:
            st.markdown(metric_card("System", optimal.system.label), unsafe_allow_html=True)
        with col2:
            st.markdown(metric_card("Cost", f"${optimal.total_cost / project.plan_area:.2f}/sf"),
                        unsafe_allow_html=True)
        with col3:
            st.markdown(metric_card("Slab / f'c",
                                    f"{optimal.slab_thickness:g} in / {optimal.concrete_strength:,.0f} psi"),
                        unsafe_allow_html=True)

    badges = " ".join(
        f"{system.label} {get_status_badge(results, system)}" for system in StructuralSystem
    )
    st.markdown(badges, unsafe_allow_html=True)

    tab1, tab2, tab3, tab4 = st.tabs(["Designs", "Costs", "Span Comparison", "Diagnostics"])

    with tab1:
        st.dataframe(design_table(results, project), use_container_width=True)

    with tab2:
        costs = cost_table(results)
        if costs.empty:
            st.info("No feasible designs to price.")
        else:
            st.dataframe(costs, use_container_width=True)

    with tab3:
        if results.comparisons:
            st.plotly_chart(create_comparison_chart(results, project.bay_length), use_container_width=True)
            st.dataframe(comparison_table(results).style.format("${:.2f}", na_rep="n/a"),
                         use_container_width=True)
        else:
            st.info("No comparison spans were evaluated.")

    with tab4:
        for line in check_summary(results):
            st.markdown(f"- {line}")

    st.markdown("### Generate Report")
    if st.button("Generate HTML Report", type="primary", use_container_width=True):
        with st.spinner("Generating report..."):
            html_content = ReportGenerator(project, results).generate()
            st.download_button(
                label="Download Report (HTML)",
                data=html_content,
                file_name=f"{project.name.replace(' ', '_')}_{datetime.now():%Y%m%d}_PT.html",
                mime="text/html",
                use_container_width=True
            )
            with st.expander("Preview Report"):
                st.components.v1.html(html_content, height=800, scrolling=True)


def main():
    apply_theme()
    st.markdown("""
    <h1 style="margin-bottom: 0;">PT Optimizer</h1>
    <p style="color: #64748B; margin-top: 0;">Post-Tensioned Parking Structure Floor Systems</p>
    """, unsafe_allow_html=True)

    config = get_config()
    store = get_store(config.store_dir)

    with st.sidebar:
        st.markdown("### Project Settings")
        try:
            project = render_project_inputs()
            costs = render_cost_inputs()
        except CostTableError as e:
            st.error(f"Invalid slab cost table: {e}")
            return
        except InputError as e:
            st.error(f"Invalid input: {e}")
            return

        run = st.button("Optimize", type="primary", use_container_width=True)

    if run:
        project_id = store.create(project, costs)
        with st.spinner("Searching flat plate, one-way and two-way beam systems..."):
            optimize(project_id, store, config)
        st.session_state.project_id = project_id

    project_id = st.session_state.get("project_id")
    if project_id is None:
        st.info("Enter the bay geometry and unit costs, then click Optimize.")
        return

    try:
        record = store.get(project_id)
    except ProjectNotFoundError:
        st.warning("The selected project is no longer in the store.")
        return

    if record.results is None:
        st.info("This project has not been optimized yet.")
        return

    render_results(record)

    st.divider()
    st.markdown("""
    <p style="text-align: center; color: #94A3B8; font-size: 12px;">
        PT Optimizer | ACI 318-19 + ACI 362.1R | Preliminary design only
    </p>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
