#!filepath: statlearn/observability/timeline_reporter.py
from typing import Dict, List

from statlearn import logs


def timeline_rows(timeline: Dict[str, float]) -> List[str]:
    """
    One line per leaf timer: name, seconds, share of the run total.
    """
    total = sum(timeline.values())
    rows = []
    for name, sec in timeline.items():
        share = sec / total if total > 0 else 0.0
        rows.append(f"{str(name):<30} {sec:>8.3f}s {share:>6.1%}")
    rows.append(f"{'Total':<30} {total:>8.3f}s")
    return rows


def report_timeline(timeline: Dict[str, float], run_id: str) -> float:
    """Log the timeline of one run, return total seconds."""
    logs.info(f"[Timeline] ===== {run_id} =====")
    for row in timeline_rows(timeline):
        logs.info(f"[Timeline] {row}")
    return sum(timeline.values())
