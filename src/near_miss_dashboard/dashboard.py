from __future__ import annotations

import logging

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from near_miss_dashboard.config import Settings, load_settings, setup_logging
from near_miss_dashboard.filters import ALL, get_unique_severities, get_unique_years
from near_miss_dashboard.io import load_incidents
from near_miss_dashboard.pipeline import build_dashboard_data
from near_miss_dashboard.transform import normalize_data
from near_miss_dashboard.viz import (
    monthly_series,
    severity_pivot_frame,
    top_entries,
    truncate_label,
)

logger = logging.getLogger(__name__)


@st.cache_data(show_spinner=False)
def _load_normalized(data_path: str) -> list[dict]:
    return normalize_data(load_incidents(data_path))


def _no_data() -> None:
    st.info("No Data Available")


def _bar_chart(bucket: dict[str, int], settings: Settings, color: str) -> None:
    if not bucket:
        _no_data()
        return
    series = pd.Series(bucket, dtype="int64", name="Incidents")
    series.index = [truncate_label(name, settings.chart_label_length) for name in series.index]
    st.bar_chart(series, color=color)


def _pie_chart(bucket: dict[str, int], settings: Settings) -> None:
    if not bucket:
        _no_data()
        return
    fig, ax = plt.subplots(figsize=(5, 5))
    colors = [settings.palette[i % len(settings.palette)] for i in range(len(bucket))]
    ax.pie(list(bucket.values()), labels=list(bucket.keys()), colors=colors, autopct="%1.0f%%")
    ax.axis("equal")
    st.pyplot(fig)
    plt.close(fig)


def _top_locations_chart(rows: list[dict], settings: Settings) -> None:
    if not rows:
        _no_data()
        return
    fig, ax = plt.subplots(figsize=(8, 5))
    labels = [truncate_label(row["location"], settings.chart_label_length) for row in rows]
    counts = [row["count"] for row in rows]
    ax.barh(labels[::-1], counts[::-1], color=settings.palette[3])
    ax.set_xlabel("Incidents")
    ax.grid(axis="x", alpha=0.2)
    fig.tight_layout()
    st.pyplot(fig)
    plt.close(fig)


def _top_causes_chart(bucket: dict[str, int], settings: Settings) -> None:
    counts = top_entries(bucket, settings.top_causes_limit, settings.chart_label_length)
    if counts.empty:
        _no_data()
        return
    fig, ax = plt.subplots(figsize=(8, 5))
    colors = [settings.palette[i % len(settings.palette)] for i in range(len(counts))]
    ax.barh(counts.index[::-1], counts.values[::-1], color=colors[::-1])
    ax.set_xlabel("Incidents")
    fig.tight_layout()
    st.pyplot(fig)
    plt.close(fig)


def _render_kpis(kpis: dict, settings: Settings) -> None:
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Incidents", f"{kpis['total_incidents']:,}")
    k2.metric(
        "Highest Severity",
        f"{kpis['highest_severity_count']:,}",
        help=f"Most frequent severity: {kpis['highest_severity_level']}",
    )
    k2.caption(kpis["highest_severity_level"])
    k3.metric("Most Common Cause", truncate_label(kpis["most_common_action_cause"], settings.kpi_label_length))
    k4.metric("Most Common Location", kpis["most_common_location"])


def _render_dashboard(normalized: list[dict], settings: Settings) -> None:
    years = [ALL] + get_unique_years(normalized)
    severities = [ALL] + get_unique_severities(normalized)

    f1, f2 = st.columns(2)
    selected_year = f1.selectbox("📅 Filter by Year", options=years, index=0)
    selected_severity = f2.selectbox("⚠️ Filter by Severity", options=severities, index=0)

    dashboard = build_dashboard_data(
        normalized,
        year=selected_year,
        severity=selected_severity,
        top_n=settings.top_locations_limit,
    )

    _render_kpis(dashboard["kpis"], settings)
    palette = settings.palette

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("📊 Incidents by Action Cause")
        _bar_chart(dashboard["action_cause"], settings, palette[0])
    with c2:
        st.subheader("🥧 Severity Distribution")
        _pie_chart(dashboard["severity"], settings)

    monthly = monthly_series(dashboard["monthly"])
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("📈 Monthly Incident Trend")
        if monthly.empty:
            _no_data()
        else:
            st.line_chart(monthly, color=palette[2])
    with c2:
        st.subheader("📉 Monthly Trend (Area View)")
        if monthly.empty:
            _no_data()
        else:
            st.area_chart(monthly, color=palette[4])

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("📍 Top Locations with Most Incidents")
        _top_locations_chart(dashboard["top_locations"], settings)
    with c2:
        st.subheader("🌍 Incidents by Region")
        _bar_chart(dashboard["region"], settings, palette[4])

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("📊 Severity Distribution by Month")
        pivot = severity_pivot_frame(dashboard["severity_by_month"], settings.severity_display_order)
        if pivot.empty:
            _no_data()
        else:
            st.bar_chart(
                pivot,
                color=[settings.severity_colors[c] for c in settings.severity_display_order],
            )
    with c2:
        st.subheader("🎯 Top Action Causes")
        _top_causes_chart(dashboard["action_cause"], settings)

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("👤 Incidents by Behavior Type")
        _bar_chart(dashboard["behavior_type"], settings, palette[5])
    with c2:
        st.subheader("💼 Incidents by Job/Project")
        _bar_chart(dashboard["job"], settings, "#06b6d4")


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    st.set_page_config(page_title="Near Miss Incident Dashboard", layout="wide")
    st.title("Near Miss Incident Dashboard")
    st.caption("Comprehensive analysis of incident data")

    try:
        with st.spinner("Loading dashboard data..."):
            normalized = _load_normalized(settings.data_path)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Failed to load incident data: %s", exc)
        st.error(f"Failed to load incident data: {exc}")
        return

    if not normalized:
        st.info(f"No Data Available. Please ensure {settings.data_path} contains valid data.")
        return

    _render_dashboard(normalized, settings)


if __name__ == "__main__":
    main()
