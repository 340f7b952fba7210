"""Metrics tracking and export for packing experiments.

Provides dataclasses for tracking experiment metrics and utilities for
exporting results to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from boxpack.core.models import Bin

BIN_CSV_FIELDS = [
    "bin_name", "dataset_id", "strategy", "items_packed",
    "utilization_pct", "volume_used", "volume_total", "weight_packed",
    "recorded_at",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BinMetrics:
    """Metrics for a single used bin.

    Attributes:
        bin_name: Name of the bin.
        items_packed: Number of items placed in the bin.
        utilization_pct: Volume utilization percentage (0-100).
        volume_used: Summed volume of packed items.
        volume_total: Volume of the bin.
        weight_packed: Summed weight of packed items.
        strategy: Packing strategy name.
        dataset_id: Dataset identifier this bin belongs to.
        recorded_at: Timestamp when the metrics were taken.
    """

    bin_name: str
    items_packed: int
    utilization_pct: float
    volume_used: float
    volume_total: float
    weight_packed: float
    strategy: str
    dataset_id: str
    recorded_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_bin(cls, bin: Bin, strategy: str, dataset_id: str) -> "BinMetrics":
        return cls(
            bin_name=bin.name,
            items_packed=len(bin.items),
            utilization_pct=bin.volume_utilization,
            volume_used=bin.used_volume,
            volume_total=bin.volume,
            weight_packed=bin.used_weight,
            strategy=strategy,
            dataset_id=dataset_id,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamp.

        Example:
            >>> bm = BinMetrics("crate", 12, 78.5, 785.0, 1000.0, 40.0, "greedy", "dataset_001")
            >>> bm.to_dict()["utilization_pct"]
            78.5
        """
        d = asdict(self)
        d["recorded_at"] = self.recorded_at.isoformat()
        return d


@dataclass
class ExperimentMetrics:
    """Aggregate metrics for an entire experiment run.

    Attributes:
        experiment_id: Unique identifier for the experiment.
        total_runs: Number of (dataset, strategy) packings planned.
        runs_completed: Number of packings finished (successfully or not).
        total_bins: Number of bins that received at least one item.
        total_items: Number of items packed.
        unfit_items: Number of items that fit in no bin.
        avg/median/min/max_utilization_pct: Utilization over used bins.
        runtime_seconds: Total runtime in seconds.
        errors_count: Number of packings rejected before placement.
        started_at: Experiment start timestamp.
        completed_at: Experiment completion timestamp (None if running).
        bin_metrics: List of per-bin metrics.
    """

    experiment_id: str
    total_runs: int = 0
    runs_completed: int = 0
    total_bins: int = 0
    total_items: int = 0
    unfit_items: int = 0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    errors_count: int = 0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    bin_metrics: list[BinMetrics] = field(default_factory=list)

    def add_bin(self, metrics: BinMetrics) -> None:
        """Add a bin's metrics to the experiment.

        Example:
            >>> em = ExperimentMetrics("exp_001", total_runs=2)
            >>> em.add_bin(BinMetrics("crate", 12, 78.5, 785.0, 1000.0, 40.0, "greedy", "d0"))
            >>> em.total_bins, em.total_items
            (1, 12)
        """
        self.bin_metrics.append(metrics)
        self.total_bins += 1
        self.total_items += metrics.items_packed
        self._recalculate_stats()

    def record_run(self, unfit: int = 0) -> None:
        self.runs_completed += 1
        self.unfit_items += unfit

    def record_error(self) -> None:
        self.errors_count += 1

    def mark_complete(self) -> None:
        """Mark experiment as complete and calculate final runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def strategy_summary(self) -> dict[str, dict[str, float]]:
        """Bins used, items packed and mean utilization per strategy."""
        summary: dict[str, dict[str, float]] = {}
        for strategy in sorted({m.strategy for m in self.bin_metrics}):
            rows = [m for m in self.bin_metrics if m.strategy == strategy]
            summary[strategy] = {
                "bins": len(rows),
                "items": sum(m.items_packed for m in rows),
                "avg_utilization_pct": float(np.mean([m.utilization_pct for m in rows])),
            }
        return summary

    def _recalculate_stats(self) -> None:
        """Recalculate aggregate statistics from bin metrics."""
        if not self.bin_metrics:
            return

        utilizations = np.array([m.utilization_pct for m in self.bin_metrics])
        self.avg_utilization_pct = float(np.mean(utilizations))
        self.median_utilization_pct = float(np.median(utilizations))
        self.min_utilization_pct = float(np.min(utilizations))
        self.max_utilization_pct = float(np.max(utilizations))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["bin_metrics"] = [m.to_dict() for m in self.bin_metrics]
        d["strategies"] = self.strategy_summary()
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary without per-bin details."""
        d = self.to_dict()
        del d["bin_metrics"]
        return d


def export_to_json(metrics: ExperimentMetrics, output_path: Path | str, include_bins: bool = True) -> None:
    """Export experiment metrics to a JSON file.

    Args:
        metrics: ExperimentMetrics instance to export.
        output_path: Path to output JSON file.
        include_bins: If True, include per-bin metrics. If False, summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_bins else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: ExperimentMetrics, output_path: Path | str) -> None:
    """Export per-bin metrics to a CSV file (header only if there are none)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=BIN_CSV_FIELDS)
        writer.writeheader()
        for m in metrics.bin_metrics:
            writer.writerow(m.to_dict())


def format_summary(metrics: ExperimentMetrics) -> str:
    """Generate human-readable summary of experiment metrics.

    Example:
        >>> em = ExperimentMetrics("exp_001", total_runs=2)
        >>> "Experiment: exp_001" in format_summary(em)
        True
    """
    lines = [
        "=" * 60,
        f"Experiment: {metrics.experiment_id}",
        "=" * 60,
        f"Packings: {metrics.runs_completed}/{metrics.total_runs}",
        f"Bins Used: {metrics.total_bins}",
        f"Items Packed: {metrics.total_items}",
        f"Unfit Items: {metrics.unfit_items}",
        "",
        "Utilization Statistics:",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
    ]
    for strategy, row in metrics.strategy_summary().items():
        lines.append(
            f"  {strategy}: {int(row['bins'])} bins, {int(row['items'])} items, "
            f"{row['avg_utilization_pct']:.2f}% avg"
        )
    lines += [
        "",
        f"Runtime: {metrics.runtime_seconds:.1f} seconds",
        f"Errors: {metrics.errors_count}",
        "",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)


def format_packing_report(bins: Iterable[Bin], unfit_items: Iterable = ()) -> str:
    """Per-bin listing of placed items, followed by the unfit items."""
    lines = []
    for bin in bins:
        lines.append(f"{bin}: {len(bin.items)} items, {bin.volume_utilization:.1f}% used")
        for item in bin.items:
            lines.append(f"  {item}")
    unfit = list(unfit_items)
    if unfit:
        lines.append(f"Unfit items ({len(unfit)}):")
        for item in unfit:
            lines.append(f"  {item.name}({item.width:g}x{item.height:g}x{item.depth:g})")
    return "\n".join(lines)
