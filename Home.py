import streamlit as st
import sys
import os

# Add parent directory to path to import graphwidgets
sys.path.append(os.path.dirname(__file__))

from graphwidgets.nav import render_sidebar

st.set_page_config(
    page_title="Graph Widgets Hub",
    page_icon="📐",
    layout="wide"
)

# Render Custom Sidebar
render_sidebar()

st.title("📐 Graph Widgets")
st.markdown(r"""
### Select a widget to begin

Each widget is rendered to a **standalone SVG** sized to exactly what was drawn: titles, rotated axis
labels and legends are never cut off, and invalid data is rejected before anything is drawn.

---
""")

# --- LAYOUT ---
col1, col2 = st.columns(2)

with col1:
    st.subheader("Functions & Concepts")
    st.info("Cartesian planes, curves and qualitative graphs.")

    st.page_link("pages/3_Function_Plot.py", label="Function Plot", icon="📈", use_container_width=True)
    st.page_link("pages/4_Conceptual_Graph.py", label="Conceptual Graph", icon="〰️", use_container_width=True)

    st.markdown("* $y = f(x)$ curves and polynomials\n* Open and closed points\n* Quadrant labels")

with col2:
    st.subheader("Statistics")
    st.info("Bivariate and categorical data.")

    st.page_link("pages/1_Scatter_Plot.py", label="Scatter Plot", icon="📉", use_container_width=True)
    st.page_link("pages/2_Stick_Plot.py", label="Stick Plot", icon="📊", use_container_width=True)

    st.markdown("* Linear, quadratic and exponential best fit\n* Reference lines\n* Categorical bands")

st.markdown("---")
st.caption("Graph Widgets v1.0")
