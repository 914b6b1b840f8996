from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .aggregate import (
    count_by_month,
    get_action_cause_data,
    get_behavior_type_data,
    get_job_data,
    get_region_data,
    get_severity_by_month,
    get_top_locations,
    group_by_severity,
)
from .config import load_settings, setup_logging
from .filters import ALL, apply_filters, get_unique_severities, get_unique_years
from .io import load_incidents, save_run_metadata
from .kpis import calculate_kpis
from .transform import normalize_data
from .viz import bar_counts, monthly_trend, severity_stacked_bars

logger = logging.getLogger(__name__)


def build_dashboard_data(normalized: list[dict], year=ALL, severity=ALL, top_n: int = 10) -> dict:
    """Everything the dashboard widgets consume for one facet selection.

    Facet options come from the unfiltered collection so a selection never
    hides the other choices.
    """
    filtered = apply_filters(normalized, year, severity)
    logger.debug("Facets year=%r severity=%r kept %d of %d records", year, severity, len(filtered), len(normalized))
    return {
        "years": [ALL] + get_unique_years(normalized),
        "severities": [ALL] + get_unique_severities(normalized),
        "filtered": filtered,
        "kpis": calculate_kpis(filtered),
        "action_cause": get_action_cause_data(filtered),
        "severity": group_by_severity(filtered),
        "monthly": count_by_month(filtered),
        "top_locations": get_top_locations(filtered, top_n),
        "region": get_region_data(filtered),
        "behavior_type": get_behavior_type_data(filtered),
        "job": get_job_data(filtered),
        "severity_by_month": get_severity_by_month(filtered),
    }


def summary_payload(dashboard: dict) -> dict:
    payload = {key: value for key, value in dashboard.items() if key != "filtered"}
    payload["filtered_count"] = len(dashboard["filtered"])
    return payload


def get_versions() -> dict:
    import importlib
    pkgs = ["pandas", "matplotlib", "streamlit"]
    versions = {}
    for p in pkgs:
        try:
            mod = importlib.import_module(p)
            versions[p] = getattr(mod, "__version__", "unknown")
        except ImportError:
            versions[p] = "not_installed"
    return versions


def main(argv: list[str] | None = None):
    settings = load_settings()
    ap = argparse.ArgumentParser(description="Summarize a near-miss incident collection into charts and KPIs.")
    ap.add_argument("--data", required=True, help="Path to incidents .json or .csv")
    ap.add_argument("--out", default="outputs", help="Output directory (default: outputs)")
    ap.add_argument("--year", default=ALL, help="Year facet (default: All)")
    ap.add_argument("--severity", default=ALL, help="Severity facet, e.g. High (default: All)")
    ap.add_argument("--top-n", type=int, default=settings.top_locations_limit, help="Number of top locations")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level)

    data_path = Path(args.data)
    out_dir = Path(args.out)

    raw = load_incidents(data_path)
    normalized = normalize_data(raw)
    dashboard = build_dashboard_data(normalized, args.year, args.severity, args.top_n)

    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "summary.json").write_text(json.dumps(summary_payload(dashboard), indent=2))

    fig_dir = out_dir / "figures"
    palette = settings.palette
    bar_counts(dashboard["action_cause"], "Incidents by Action Cause", fig_dir / "action_cause.png", color=palette[0])
    bar_counts(
        {row["location"]: row["count"] for row in dashboard["top_locations"]},
        "Top Locations with Most Incidents",
        fig_dir / "top_locations.png",
        top_n=args.top_n,
        color=palette[3],
    )
    bar_counts(dashboard["region"], "Incidents by Region", fig_dir / "region.png", color=palette[4])
    monthly_trend(dashboard["monthly"], fig_dir / "monthly_trend.png", color=palette[2])
    severity_stacked_bars(
        dashboard["severity_by_month"],
        fig_dir / "severity_by_month.png",
        settings.severity_display_order,
        settings.severity_colors,
    )

    save_run_metadata(out_dir / "run_metadata.json", data_path, get_versions(), len(normalized))
    print("✅ Done.")
    print(f"- Incidents: {dashboard['kpis']['total_incidents']} of {len(normalized)}")
    print(f"- Summary: {out_dir / 'summary.json'}")
    print(f"- Figures: {fig_dir}")


if __name__ == "__main__":
    main()
