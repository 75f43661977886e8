# ui/dashboard_panel.py
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from models import Snapshot, Status
from ui.common import go_to
from utils.kpis import summarize
from utils.quick_filter import DELAYED, URGENT, QuickFilterSlot

COLORS = {
    "green": "#39FF14",
    "blue": "#04D9FF",
    "pink": "#FF00FF",
    "orange": "#FF5E00",
    "purple": "#BF00FF",
    "red": "#FF0000",
    "empty": "#F1F5F9",
}
BAR_COLORS = [COLORS["blue"], COLORS["pink"], COLORS["green"], COLORS["purple"]]


def _inspect(slot: QuickFilterSlot, token: str):
    slot.put(token)
    go_to("Tasks")


def _kpi_card(col, title, value, caption, token, slot, alert=False):
    with col:
        st.metric(title, value)
        if alert:
            st.error(caption)
        else:
            st.caption(caption)
        st.button("View tasks", key=f"kpi_{token}", on_click=_inspect, args=(slot, token),
                  use_container_width=True)


def _donut(data: pd.DataFrame, center: str, empty_label: str):
    if data["value"].sum() == 0:
        data = pd.DataFrame([{"name": empty_label, "value": 1, "color": COLORS["empty"]}])
    fig = px.pie(data, names="name", values="value", hole=0.6,
                 color="name", color_discrete_map=dict(zip(data["name"], data["color"])))
    fig.update_traces(textinfo="none")
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10),
                      annotations=[dict(text=center, showarrow=False, font=dict(size=24))])
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})


def render_dashboard(snapshot: Snapshot, slot: QuickFilterSlot):
    st.subheader("Executive Dashboard")
    summary = summarize(snapshot)
    counts, delivery, planning = summary.status, summary.delivery, summary.planning

    c1, c2, c3, c4, c5 = st.columns(5)
    _kpi_card(c1, "Completed", counts.completed, "Goal achieved", Status.COMPLETED.value, slot)
    _kpi_card(c2, "In Progress", counts.in_progress, "Full steam ahead", Status.IN_PROGRESS.value, slot)
    _kpi_card(c3, "Pending", counts.pending, "In queue", Status.PENDING.value, slot)
    _kpi_card(c4, "Delayed", counts.delayed, "Action required", DELAYED, slot)
    _kpi_card(c5, "Unplanned", planning.unplanned_count,
              f"{planning.unplanned_percentage}% of total", URGENT, slot, alert=planning.alert)

    st.markdown("---")
    col1, col2, col3 = st.columns(3, gap="medium")
    with col1:
        st.markdown("**Actions status**")
        _donut(pd.DataFrame([
            {"name": "Completed", "value": counts.completed, "color": COLORS["green"]},
            {"name": "In Progress", "value": counts.in_progress, "color": COLORS["blue"]},
            {"name": "Pending", "value": counts.pending, "color": COLORS["orange"]},
            {"name": "Delayed", "value": counts.delayed, "color": COLORS["pink"]},
        ]), str(summary.total), "No data")
    with col2:
        st.markdown("**Planning mix**")
        _donut(pd.DataFrame([
            {"name": "Planned", "value": planning.planned_count, "color": COLORS["blue"]},
            {"name": "Unplanned (Urgent)", "value": planning.unplanned_count, "color": COLORS["red"]},
        ]), f"{planning.unplanned_percentage}%", "No tasks")
    with col3:
        st.markdown("**On-time delivery**")
        _donut(pd.DataFrame([
            {"name": "On Time", "value": delivery.on_time_count, "color": COLORS["green"]},
            {"name": "Late", "value": delivery.late_count, "color": COLORS["pink"]},
        ]), f"{delivery.on_time_percentage}%", "No closed tasks")

    st.markdown("---")
    col1, col2 = st.columns(2, gap="medium")
    with col1:
        st.markdown("**Team workload (open hours)**")
        if not summary.workload:
            st.info("Add team members to see their workload.")
        else:
            names = [w.member.first_name for w in summary.workload]
            fig = go.Figure()
            fig.add_bar(x=names, y=[w.hours for w in summary.workload], name="Hours",
                        marker_color=[BAR_COLORS[i % len(BAR_COLORS)] for i in range(len(names))])
            fig.add_bar(x=names, y=[w.capacity for w in summary.workload], name="Capacity",
                        marker_color=COLORS["empty"])
            fig.update_layout(barmode="group", margin=dict(l=10, r=10, t=10, b=10))
            st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})
    with col2:
        st.markdown("**Department distribution**")
        if not summary.departments:
            st.info("No department data available.")
        else:
            ddf = pd.DataFrame([{"name": d.department.name, "value": d.count, "color": d.department.color}
                                for d in summary.departments])
            fig = px.pie(ddf, names="name", values="value", color="name",
                         color_discrete_map=dict(zip(ddf["name"], ddf["color"])))
            fig.update_layout(margin=dict(l=10, r=10, t=10, b=10))
            st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})
