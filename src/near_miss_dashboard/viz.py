from __future__ import annotations

from pathlib import Path
from typing import Iterable

import matplotlib.pyplot as plt
import pandas as pd

DEFAULT_FIGSIZE = (8, 4.5)
DEFAULT_DPI = 200


def truncate_label(label, max_length: int) -> str:
    text = str(label)
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def top_entries(bucket: dict[str, int], n: int, max_label_length: int | None = None) -> pd.Series:
    """Largest ``n`` buckets, biggest first, with labels shortened for display."""
    if not bucket:
        return pd.Series(dtype="int64")
    counts = pd.Series(bucket, dtype="int64").sort_values(ascending=False, kind="stable").head(n)
    if max_label_length is not None:
        counts.index = [truncate_label(name, max_label_length) for name in counts.index]
    return counts


def severity_pivot_frame(rows: list[dict], categories: Iterable[str]) -> pd.DataFrame:
    """Month x severity table in display order, ready for a stacked bar chart."""
    columns = list(categories)
    if not rows:
        return pd.DataFrame(columns=columns, dtype="int64")
    frame = pd.DataFrame(rows).set_index("name")
    return frame.reindex(columns=columns, fill_value=0).fillna(0).astype("int64")


def monthly_series(monthly: list[dict]) -> pd.Series:
    if not monthly:
        return pd.Series(dtype="int64")
    frame = pd.DataFrame(monthly)
    return pd.Series(frame["count"].values, index=frame["month"].values, name="Incidents")


def save_fig(fig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight", dpi=DEFAULT_DPI)


def bar_counts(bucket: dict[str, int], title: str, out_path: Path, top_n: int = 15, color: str | None = None):
    counts = top_entries(bucket, top_n, max_label_length=30)
    fig, ax = plt.subplots(figsize=DEFAULT_FIGSIZE)
    if counts.empty:
        ax.axis("off")
        ax.text(0.05, 0.5, "No Data Available", fontsize=12)
    else:
        plot_kwargs = {"color": color} if color else {}
        counts.sort_values().plot(kind="barh", ax=ax, **plot_kwargs)
        ax.set_xlabel("Incidents")
    ax.set_title(title)
    save_fig(fig, out_path)
    plt.close(fig)


def monthly_trend(monthly: list[dict], out_path: Path, color: str | None = None):
    ts = monthly_series(monthly)
    fig, ax = plt.subplots(figsize=DEFAULT_FIGSIZE)
    if ts.empty:
        ax.axis("off")
        ax.text(0.05, 0.5, "No Data Available", fontsize=12)
    else:
        ax.plot(range(len(ts)), ts.values, marker="o", color=color)
        ax.set_xticks(range(len(ts)))
        ax.set_xticklabels(ts.index, rotation=45, ha="right")
        ax.set_ylabel("Incidents")
    ax.set_title("Monthly Incident Trend")
    save_fig(fig, out_path)
    plt.close(fig)


def severity_stacked_bars(
    rows: list[dict],
    out_path: Path,
    categories: Iterable[str],
    colors: dict[str, str] | None = None,
):
    categories = list(categories)
    pivot = severity_pivot_frame(rows, categories)
    fig, ax = plt.subplots(figsize=(10, 5))
    if pivot.empty:
        ax.axis("off")
        ax.text(0.05, 0.5, "No Data Available", fontsize=12)
    else:
        plot_kwargs = {"color": [colors[c] for c in categories]} if colors else {}
        pivot.plot(kind="bar", stacked=True, ax=ax, **plot_kwargs)
        ax.set_xlabel("")
        ax.set_ylabel("Incidents")
        ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=8)
    ax.set_title("Severity Distribution by Month")
    fig.tight_layout()
    save_fig(fig, out_path)
    plt.close(fig)
