import streamlit as st
import sys
import os

# Add parent directory to path so we can import graphwidgets
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from graphwidgets.nav import render_preview, render_sidebar

st.set_page_config(layout="wide", page_title="Function Plot")
render_sidebar()

# --- Dimensions ---
st.sidebar.markdown("### Dimensions")
width = st.sidebar.number_input("Chart Width (px)", 100, 1200, 400, step=20)
height = st.sidebar.number_input("Chart Height (px)", 100, 1200, 400, step=20)
show_quadrants = st.sidebar.checkbox("Quadrant Labels", value=False)

col_data, col_preview = st.columns([1.3, 1.7])

with col_data:
    st.subheader("Functions")
    if 'func_count' not in st.session_state:
        st.session_state.func_count = 1

    def add_func():
        st.session_state.func_count += 1

    def remove_func():
        if st.session_state.func_count > 1:
            st.session_state.func_count -= 1

    c_btn1, c_btn2 = st.columns(2)
    c_btn1.button("Add Function", on_click=add_func, use_container_width=True)
    c_btn2.button("Remove Last", on_click=remove_func, use_container_width=True,
                  disabled=(st.session_state.func_count <= 1))

    polylines = []
    for i in range(st.session_state.func_count):
        with st.expander(f"Function {i + 1}", expanded=(i == 0)):
            c_eq, c_col = st.columns([3, 1])
            expr = c_eq.text_input("y =", "x^2 - 3" if i == 0 else "", key=f"expr_{i}")
            color = c_col.color_picker("Colour", "#1E90FF", key=f"col_{i}")
            dashed = st.checkbox("Dashed", value=False, key=f"dash_{i}")
            label = st.text_input("Label", "", key=f"lbl_{i}")
            if expr.strip():
                polylines.append({"type": "expression", "id": f"polyline_{i}", "expression": expr,
                                  "color": color, "style": "dashed" if dashed else "solid", "label": label})

    st.markdown("#### Points")
    st.markdown("One point per line as `x, y, label, open|closed`.")
    points_str = st.text_area("Points", "0, -3, A, closed", height=100)
    points = []
    for i, row in enumerate(points_str.splitlines()):
        parts = [p.strip() for p in row.split(",")]
        if len(parts) < 2:
            continue
        try:
            points.append({"id": f"point_{i}", "x": float(parts[0]), "y": float(parts[1]),
                           "label": parts[2] if len(parts) > 2 else "",
                           "style": parts[3] if len(parts) > 3 else "closed"})
        except ValueError:
            st.warning(f"Skipping point row {row!r}: coordinates are not numbers.")

    st.markdown("#### Axes")
    c_x1, c_x2, c_x3 = st.columns(3)
    x_min = c_x1.number_input("X Min", value=-5.0)
    x_max = c_x2.number_input("X Max", value=5.0)
    x_step = c_x3.number_input("X Step", value=1.0, min_value=0.01)
    c_y1, c_y2, c_y3 = st.columns(3)
    y_min = c_y1.number_input("Y Min", value=-5.0)
    y_max = c_y2.number_input("Y Max", value=10.0)
    y_step = c_y3.number_input("Y Step", value=1.0, min_value=0.01)
    label_x = st.text_input("X Label", "x")
    label_y = st.text_input("Y Label", "y")

props = {
    "type": "functionPlotGraph",
    "width": width,
    "height": height,
    "xAxis": {"label": label_x, "min": x_min, "max": x_max, "tickInterval": x_step, "showGridLines": True},
    "yAxis": {"label": label_y, "min": y_min, "max": y_max, "tickInterval": y_step, "showGridLines": True},
    "showQuadrantLabels": show_quadrants,
    "polylines": polylines,
    "points": points,
}

with col_preview:
    st.subheader("Preview")
    render_preview(props, "function_plot.svg")
