import streamlit as st
import sys
import os

# Add parent directory to path so we can import graphwidgets
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from graphwidgets.nav import render_preview, render_sidebar

st.set_page_config(layout="wide", page_title="Conceptual Graph")
render_sidebar()

st.sidebar.markdown("### Dimensions")
width = st.sidebar.number_input("Chart Width (px)", 100, 1200, 400, step=20)
height = st.sidebar.number_input("Chart Height (px)", 100, 1200, 300, step=20)

col_data, col_preview = st.columns([1.3, 1.7])

with col_data:
    st.subheader("Curve")
    label_x = st.text_input("X Label", "Time")
    label_y = st.text_input("Y Label", "Population")
    st.markdown("One curve point per line as `x, y`.")
    curve_str = st.text_area("Curve Points", "0, 1\n1, 2\n2, 4\n3, 7\n4, 9\n5, 10", height=140)
    curve_color = st.color_picker("Curve Colour", "#2E8B57")

    st.markdown("#### Highlights")
    st.markdown("One highlight per line as `t, label` with `t` between 0 and 1.")
    highlights_str = st.text_area("Highlights", "0.5, Fastest growth", height=80)
    highlight_color = st.color_picker("Highlight Colour", "#cc3333")

curve_points = []
for row in curve_str.splitlines():
    parts = [p.strip() for p in row.split(",")]
    if len(parts) >= 2:
        try:
            curve_points.append({"x": float(parts[0]), "y": float(parts[1])})
        except ValueError:
            st.warning(f"Skipping curve row {row!r}.")

highlights = []
for row in highlights_str.splitlines():
    if "," not in row:
        continue
    t, label = row.split(",", 1)
    try:
        highlights.append({"t": float(t), "label": label.strip()})
    except ValueError:
        st.warning(f"Skipping highlight row {row!r}.")

props = {
    "type": "conceptualGraph",
    "width": width,
    "height": height,
    "xAxisLabel": label_x,
    "yAxisLabel": label_y,
    "curvePoints": curve_points,
    "curveColor": curve_color,
    "highlightPoints": highlights,
    "highlightPointColor": highlight_color,
    "highlightPointRadius": 6,
}

with col_preview:
    st.subheader("Preview")
    render_preview(props, "conceptual_graph.svg")
