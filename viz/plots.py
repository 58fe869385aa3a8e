from __future__ import annotations

"""
Dashboard charts.

Read-only plotting functions over the `stats` endpoints' counters. Each
`plot_*` returns a matplotlib Figure so the Streamlit dashboard can hand it
to `st.pyplot`; `save_all_plots` writes PNGs under `output/plots/` for the
CLI's `stats --plot`.

Usage:
    from viz.plots import save_all_plots
    save_all_plots(appointment_stats, client_stats, worker_stats)
"""

from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from crm.io_paths import PLOTS_DIR  # noqa: E402
from crm.models import AppointmentStats, ClientStats, WorkerStats  # noqa: E402


def _ensure_plots_dir(plots_dir: Path | None = None) -> Path:
    """Ensure the plots directory exists and return the path."""
    plots_dir = plots_dir or PLOTS_DIR
    plots_dir.mkdir(parents=True, exist_ok=True)
    return plots_dir


def _bar(title: str, counts: Dict[str, int]) -> plt.Figure:
    fig, ax = plt.subplots(figsize=(6, 3.5))
    labels = list(counts.keys())
    values = [counts[k] for k in labels]
    bars = ax.bar(labels, values, color="#4C78A8")
    ax.set_title(title)
    ax.set_ylabel("Count")
    ax.bar_label(bars)
    ax.spines[["top", "right"]].set_visible(False)
    fig.tight_layout()
    return fig


def plot_appointment_stats(stats: AppointmentStats) -> plt.Figure:
    """Appointment counters; totals are left to the cards."""
    return _bar(
        "Appointments",
        {
            "Scheduled": stats.scheduled,
            "Completed": stats.completed,
            "Cancelled": stats.cancelled,
            "Today": stats.today,
            "Upcoming (7d)": stats.upcoming,
        },
    )


def plot_client_stats(stats: ClientStats) -> plt.Figure:
    return _bar("Clients by status", {"Active": stats.active, "Inactive": stats.inactive, "Potential": stats.potential})


def plot_worker_stats(stats: WorkerStats) -> plt.Figure:
    return _bar("Workers by status", {"Active": stats.active, "Inactive": stats.inactive, "On leave": stats.on_leave})


def _save_fig(fig: plt.Figure, filename: str, plots_dir: Path | None = None) -> Path:
    out_path = _ensure_plots_dir(plots_dir) / filename
    fig.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return out_path


def save_all_plots(
    appointment_stats: AppointmentStats,
    client_stats: ClientStats,
    worker_stats: WorkerStats,
    plots_dir: Path | None = None,
) -> List[Path]:
    """Render every chart to PNG and return the written paths."""
    return [
        _save_fig(plot_appointment_stats(appointment_stats), "appointments.png", plots_dir),
        _save_fig(plot_client_stats(client_stats), "clients.png", plots_dir),
        _save_fig(plot_worker_stats(worker_stats), "workers.png", plots_dir),
    ]


__all__ = [
    "plot_appointment_stats",
    "plot_client_stats",
    "plot_worker_stats",
    "save_all_plots",
]
