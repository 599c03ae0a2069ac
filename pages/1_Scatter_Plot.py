import streamlit as st
import sys
import os

# Add parent directory to path so we can import graphwidgets
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from graphwidgets.nav import render_preview, render_sidebar

st.set_page_config(layout="wide", page_title="Scatter Plot")
render_sidebar()


def parse_values(text: str):
    return [float(v) for v in text.replace("\n", ",").split(",") if v.strip()]


# ==========================================
# SIDEBAR: DIMENSIONS
# ==========================================
st.sidebar.markdown("### Dimensions")
width = st.sidebar.number_input("Chart Width (px)", 100, 1200, 400, step=20)
height = st.sidebar.number_input("Chart Height (px)", 100, 1200, 400, step=20)

col_data, col_preview = st.columns([1.3, 1.7])

# ==========================================
# MAIN COLUMN 1: DATA
# ==========================================
with col_data:
    st.subheader("Data Input")
    title = st.text_input("Title", "Height vs. Arm Span")

    c_x, c_y = st.columns(2)
    x_str = c_x.text_area("X Values", "150, 158, 165, 172, 180, 190", height=100)
    y_str = c_y.text_area("Y Values", "152, 160, 163, 175, 178, 192", height=100)

    try:
        xs, ys = parse_values(x_str), parse_values(y_str)
    except ValueError:
        st.error("Values must be comma separated numbers.")
        xs, ys = [], []
    if len(xs) != len(ys):
        st.warning(f"{len(xs)} x values but {len(ys)} y values; extra values are ignored.")

    st.markdown("#### Axes")
    c_x1, c_x2, c_x3 = st.columns(3)
    x_min = c_x1.number_input("X Min", value=140.0)
    x_max = c_x2.number_input("X Max", value=200.0)
    x_step = c_x3.number_input("X Step", value=10.0, min_value=0.01)
    label_x = st.text_input("X Label", "Height (cm)")

    c_y1, c_y2, c_y3 = st.columns(3)
    y_min = c_y1.number_input("Y Min", value=140.0)
    y_max = c_y2.number_input("Y Max", value=200.0)
    y_step = c_y3.number_input("Y Step", value=10.0, min_value=0.01)
    label_y = st.text_input("Y Label", "Arm span (cm)")
    grid = st.checkbox("Grid Lines", value=True)

    st.markdown("#### Best Fit")
    method = st.selectbox("Method", ["None", "linear", "quadratic", "exponential"], index=1)
    c_s1, c_s2, c_s3 = st.columns(3)
    fit_color = c_s1.color_picker("Colour", "#1E90FF")
    fit_width = c_s2.number_input("Thickness", 0.5, 5.0, 2.0, step=0.5)
    fit_dash = c_s3.checkbox("Dashed", value=False)

props = {
    "type": "scatterPlot",
    "width": width,
    "height": height,
    "title": title,
    "xAxis": {"label": label_x, "min": x_min, "max": x_max, "tickInterval": x_step, "gridLines": grid},
    "yAxis": {"label": label_y, "min": y_min, "max": y_max, "tickInterval": y_step, "gridLines": grid},
    "points": [{"x": x, "y": y, "label": ""} for x, y in zip(xs, ys)],
    "lines": [],
}
if method != "None":
    props["lines"].append({
        "type": "bestFit", "method": method, "label": f"{method.title()} fit",
        "style": {"color": fit_color, "strokeWidth": fit_width, "dash": fit_dash},
    })

# ==========================================
# MAIN COLUMN 2: PREVIEW
# ==========================================
with col_preview:
    st.subheader("Preview")
    render_preview(props, "scatter_plot.svg")
