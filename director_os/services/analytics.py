"""
Dashboard analytics over wire-shaped collections.

Aggregates the cockpit and PM-scorecard views from a dashboard bundle:
  - cockpit_summary: interval revenue, headcount, red projects, kanban counts
  - pm_scorecard:    per-PM project count, manual flags, average SLA
  - scope_for_user:  PM users only see their assigned project codes

Inputs are plain dicts as returned by GET /dashboard or the local store, so
the same numbers come out online and offline.
"""

from __future__ import annotations

from director_os.models.transformation import TASK_STAGES
from director_os.services.date_range import DateRange, filter_metrics
from director_os.services.risk import flag_risky_metrics


def cockpit_summary(projects, metrics, tasks, config, date_range: DateRange) -> dict:
    """Headline KPIs for the director cockpit within a date range."""
    in_range = filter_metrics(metrics, date_range)
    stage_counts = {stage: 0 for stage in TASK_STAGES}
    for task in tasks:
        if task["stage"] in stage_counts:
            stage_counts[task["stage"]] += 1

    return {
        "dateRange": date_range.to_dict(),
        "totalRevenue": sum(m["revenueActual"] for m in in_range),
        "totalHeadcount": sum(m["headcount"] for m in in_range),
        "metricCount": len(in_range),
        "redProjects": flag_risky_metrics(in_range, projects, config),
        "taskStages": stage_counts,
    }


def pm_scorecard(pms, projects, metrics, date_range: DateRange) -> list[dict]:
    """Per-PM statistics over the metrics of the projects they own."""
    in_range = filter_metrics(metrics, date_range)
    cards = []
    for pm in pms:
        codes = {p["projectCode"] for p in projects if p.get("pmId") == pm["id"]}
        pm_metrics = [m for m in in_range if m["projectCode"] in codes]
        avg_sla = (
            sum(m["slaAchieved"] for m in pm_metrics) / len(pm_metrics)
            if pm_metrics else 0
        )
        cards.append({
            "pm": pm,
            "totalProjects": len(codes),
            "riskCount": sum(1 for m in pm_metrics if m.get("riskFlag")),
            "avgSla": avg_sla,
            "dataPoints": len(pm_metrics),
        })
    return cards


def scope_for_user(bundle: dict, user: dict | None) -> dict:
    """Narrow a dashboard bundle to what ``user`` may see.

    Directors (and anonymous callers) get the bundle unchanged. PM users get
    only projects and metrics whose code is in ``assignedProjectCodes``.
    """
    if not user or user.get("role") != "PM":
        return bundle
    allowed = set(user.get("assignedProjectCodes") or [])
    scoped = dict(bundle)
    scoped["projects"] = [p for p in bundle.get("projects", []) if p["projectCode"] in allowed]
    scoped["metrics"] = [m for m in bundle.get("metrics", []) if m["projectCode"] in allowed]
    return scoped
