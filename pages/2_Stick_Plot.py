import streamlit as st
import sys
import os

# Add parent directory to path so we can import graphwidgets
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from graphwidgets.nav import render_preview, render_sidebar

st.set_page_config(layout="wide", page_title="Stick Plot")
render_sidebar()

# --- Dimensions ---
st.sidebar.markdown("### Dimensions")
width = st.sidebar.number_input("Chart Width (px)", 100, 1200, 420, step=20)
height = st.sidebar.number_input("Chart Height (px)", 100, 1200, 320, step=20)
stick_width = st.sidebar.number_input("Stick Width (px)", 1.0, 20.0, 4.0, step=1.0)

col_data, col_preview = st.columns([1.3, 1.7])

with col_data:
    st.subheader("Data Input")
    title = st.text_input("Title", "Isotopes of Chlorine")
    label_x = st.text_input("X Label", "Atomic mass (u)")
    label_y = st.text_input("Y Label", "Relative abundance (%)")

    st.markdown("One stick per line as `category, value`.")
    sticks_str = st.text_area("Sticks", "35, 75.8\n37, 24.2", height=120)
    categories_str = st.text_input("Categories", "34, 35, 36, 37, 38")

    c_y1, c_y2, c_y3 = st.columns(3)
    y_min = c_y1.number_input("Y Min", value=0.0)
    y_max = c_y2.number_input("Y Max", value=100.0)
    y_step = c_y3.number_input("Y Step", value=20.0, min_value=0.01)
    color = st.color_picker("Stick Colour", "#333333")

    reference = st.text_input("Reference line at category (blank for none)", "")
    reference_label = st.text_input("Reference label", "Average")

categories = [c.strip() for c in categories_str.split(",") if c.strip()]
sticks = []
for row in sticks_str.splitlines():
    if "," not in row:
        continue
    label, value = row.split(",", 1)
    try:
        sticks.append({"xLabel": label.strip(), "yValue": float(value), "color": color})
    except ValueError:
        st.warning(f"Skipping stick row {row!r}: value is not a number.")

props = {
    "type": "stickPlot",
    "width": width,
    "height": height,
    "title": title,
    "xAxis": {"label": label_x, "categories": categories, "showGridLines": False},
    "yAxis": {"label": label_y, "min": y_min, "max": y_max, "tickInterval": y_step, "showGridLines": True},
    "sticks": sticks,
    "stickWidthPx": stick_width,
    "references": [{"xLabel": reference.strip(), "label": reference_label, "color": "#cc3333"}]
    if reference.strip() else [],
}

with col_preview:
    st.subheader("Preview")
    render_preview(props, "stick_plot.svg")
