"""Metrics collection for batches of ladder searches."""

import csv
import json
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

import numpy as np

from .ladder import SearchResult


@dataclass
class SearchMetrics:
    """Metrics for a single ladder search."""

    # Run identification
    run_id: int
    start: str
    end: str

    # Outcome
    found: bool = False
    reason: str = ""  # mirrors SearchResult.reason
    ladder: List[str] = field(default_factory=list)
    ladder_length: int = 0

    # Work done
    expanded: int = 0
    visited: int = 0
    duration_seconds: float = 0.0

    # Custom metrics
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return asdict(self)

    @classmethod
    def from_result(cls, run_id: int, start: str, end: str, result: SearchResult) -> "SearchMetrics":
        """Build metrics from a finished search."""
        return cls(
            run_id=run_id,
            start=start,
            end=end,
            found=result.found,
            reason=result.reason,
            ladder=list(result.ladder),
            ladder_length=result.length,
            expanded=result.expanded,
            visited=result.visited,
            duration_seconds=result.duration_seconds,
        )


def _describe(values: List[float]) -> Dict[str, float]:
    if not values:
        return {"mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0}
    return {
        "mean": np.mean(values),
        "std": np.std(values),
        "min": np.min(values),
        "max": np.max(values),
    }


class MetricsAggregator:
    """Aggregates metrics across multiple searches."""

    def __init__(self):
        self.runs: List[SearchMetrics] = []

    def add_run(self, metrics: SearchMetrics):
        """Add metrics from a single search."""
        self.runs.append(metrics)

    def get_summary_statistics(self) -> Dict[str, Any]:
        """Calculate summary statistics across all searches."""
        if not self.runs:
            return {}

        reasons = defaultdict(int)
        length_distribution = defaultdict(int)
        for run in self.runs:
            reasons[run.reason] += 1
            if run.found:
                length_distribution[run.ladder_length] += 1

        found_runs = [run for run in self.runs if run.found]

        return {
            "total_runs": len(self.runs),
            "found_count": len(found_runs),
            "reasons": dict(reasons),
            "ladder_length_distribution": dict(sorted(length_distribution.items())),
            "ladder_length_stats": _describe([run.ladder_length for run in found_runs]),
            "expanded_stats": _describe([run.expanded for run in self.runs]),
            "duration_stats": {
                **_describe([run.duration_seconds for run in self.runs]),
                "total": np.sum([run.duration_seconds for run in self.runs]),
            },
            "timestamp": datetime.now().isoformat(),
        }

    def filter_runs(self, filter_func: Callable[[SearchMetrics], bool]) -> List[SearchMetrics]:
        """Filter runs based on a condition."""
        return [run for run in self.runs if filter_func(run)]

    def group_by(self, key_func: Callable[[SearchMetrics], Any]) -> Dict[Any, List[SearchMetrics]]:
        """Group runs by a key function."""
        groups = defaultdict(list)
        for run in self.runs:
            groups[key_func(run)].append(run)
        return dict(groups)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        return super().default(obj)


class MetricsExporter:
    """Export metrics to various formats."""

    @staticmethod
    def to_json(metrics: List[SearchMetrics], filepath: str, include_summary: bool = True):
        """Export metrics to JSON format."""
        data = {
            "runs": [m.to_dict() for m in metrics],
            "metadata": {
                "export_time": datetime.now().isoformat(),
                "total_runs": len(metrics),
            },
        }

        if include_summary:
            aggregator = MetricsAggregator()
            for m in metrics:
                aggregator.add_run(m)
            data["summary"] = aggregator.get_summary_statistics()

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)

    @staticmethod
    def to_csv(metrics: List[SearchMetrics], filepath: str):
        """Export metrics to CSV format, one row per search."""
        if not metrics:
            return

        rows = []
        for m in metrics:
            rows.append({
                "run_id": m.run_id,
                "start": m.start,
                "end": m.end,
                "found": m.found,
                "reason": m.reason,
                "ladder_length": m.ladder_length,
                "ladder": " ".join(m.ladder),
                "expanded": m.expanded,
                "visited": m.visited,
                "duration_seconds": m.duration_seconds,
            })

        with open(filepath, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)
