"""Light dashboard theme tokens for the PT optimizer."""

from src.core.data_models import StructuralSystem

THEME_TOKENS = {
    "colors": {
        "primary": "#1E3A5F",        # Headings
        "accent": "#3182CE",         # Metric values
        "text_secondary": "#64748B",
        "success": "#10B981",        # Optimal
        "warning": "#F59E0B",        # Feasible
        "error": "#EF4444",          # Not feasible
        "surface": "#F8FAFC",
        "border_subtle": "#E2E8F0",
    },
    "typography": {
        "font_family": "'Inter', 'Segoe UI', system-ui, sans-serif",
        "size_sm": "14px",
        "size_xl": "24px",
        "weight_bold": 600,
    },
}

SYSTEM_COLORS = {
    StructuralSystem.FLAT_PLATE: "#3182CE",
    StructuralSystem.ONE_WAY_BEAM: "#D69E2E",
    StructuralSystem.TWO_WAY_BEAM: "#38A169",
}


def get_streamlit_css() -> str:
    """Generate Streamlit custom CSS from tokens."""
    colors = THEME_TOKENS["colors"]
    typo = THEME_TOKENS["typography"]

    badge = f"""
        color: white;
        padding: 4px 12px;
        border-radius: 16px;
        font-weight: {typo["weight_bold"]};
        font-size: {typo["size_sm"]};
        display: inline-block;
    """

    return f"""
    .stApp {{ font-family: {typo["font_family"]}; }}
    h1, h2, h3 {{ color: {colors["primary"]}; }}

    .status-pass {{ background-color: {colors["success"]}; {badge} }}
    .status-warning {{ background-color: {colors["warning"]}; {badge} }}
    .status-fail {{ background-color: {colors["error"]}; {badge} }}

    .metric-card {{
        background-color: {colors["surface"]};
        border: 1px solid {colors["border_subtle"]};
        border-radius: 12px;
        padding: 16px;
        margin-bottom: 8px;
    }}
    .metric-value {{
        font-size: {typo["size_xl"]};
        font-weight: 700;
        margin: 0;
        color: {colors["accent"]};
    }}
    .metric-label {{
        font-size: {typo["size_sm"]};
        margin: 0;
        color: {colors["text_secondary"]};
    }}

    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}
    """


def metric_card(label: str, value: str) -> str:
    return (
        f'<div class="metric-card"><p class="metric-label">{label}</p>'
        f'<p class="metric-value">{value}</p></div>'
    )


def apply_theme() -> None:
    """Inject theme CSS into Streamlit app."""
    import streamlit as st
    st.markdown(f"<style>{get_streamlit_css()}</style>", unsafe_allow_html=True)
