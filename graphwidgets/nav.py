import streamlit as st
import streamlit.components.v1 as components

from .errors import GraphWidgetError
from .widgets import generate_widget, parse_widget_props


def render_sidebar():
    """
    Renders a clean sidebar with just a Home button.
    """
    with st.sidebar:
        st.page_link("Home.py", label="Home", icon="🏠", use_container_width=True)
        st.markdown("---")


def render_preview(props: dict, file_name: str):
    """
    Renders ``props`` through the widget registry, shows the SVG and offers it for download.
    Validation failures are shown in place of the preview.
    """
    try:
        svg = generate_widget(parse_widget_props(props))
    except GraphWidgetError as e:
        st.error(f"Cannot render: {e}")
        return

    html_code = f"""
    <div style="display:flex; justify-content:center; background:#f0f2f6; padding:10px;">
        <div style="background:white; box-shadow:0 4px 15px rgba(0,0,0,0.1); border:1px solid #ddd;">
            {svg}
        </div>
    </div>
    """
    components.html(html_code, height=720, scrolling=True)
    st.download_button("Download SVG", data=svg, file_name=file_name, mime="image/svg+xml",
                       use_container_width=True)
