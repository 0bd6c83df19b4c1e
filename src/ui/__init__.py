from src.ui.theme import THEME_TOKENS, SYSTEM_COLORS, get_streamlit_css, apply_theme, metric_card
from src.ui.results_view import (
    get_status_badge,
    design_table,
    cost_table,
    comparison_table,
    create_comparison_chart,
    check_summary,
)
