"""
Risk evaluation for weekly project metrics.

Pure functions over wire-shaped dicts; no database or network access, so the
same rule runs in the server, the client and the report builder.

Rule (a metric is "red" when any input trips):
    revenue_gap      = (actual - target) / target        (negative = shortfall)
    is_revenue_risk  = revenue_gap < -riskThresholds.revenueGap
    is_sla_miss      = slaAchieved < project.slaTargetRate
    is_turnover_risk = turnoverRate > riskThresholds.turnoverRate
    is_risk          = riskFlag or any of the above

A zero revenue target yields no revenue signal: revenue_gap is None and
is_revenue_risk is False. The SLA, turnover and manual flag still apply.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RiskVerdict:
    """Outcome of evaluating one metric row."""

    is_risk: bool
    revenue_gap: float | None
    is_revenue_risk: bool
    is_sla_miss: bool
    is_turnover_risk: bool

    def to_dict(self) -> dict:
        return {
            "isRisk": self.is_risk,
            "revenueGap": self.revenue_gap,
            "isRevenueRisk": self.is_revenue_risk,
            "isSlaMiss": self.is_sla_miss,
            "isTurnoverRisk": self.is_turnover_risk,
        }


def revenue_gap(actual: float, target: float) -> float | None:
    """Relative revenue gap, or None when the target is zero."""
    if not target:
        return None
    return (actual - target) / target


def evaluate_risk(metric: dict, project: dict, config: dict) -> RiskVerdict:
    """Evaluate one metric against its project's SLA target and the global thresholds.

    Args:
        metric:  WeeklyMetric dict (revenueActual, revenueTarget, slaAchieved,
                 turnoverRate, riskFlag).
        project: Project dict owning the metric (slaTargetRate).
        config:  SystemConfig dict (riskThresholds.revenueGap / turnoverRate).
    """
    thresholds = config["riskThresholds"]

    gap = revenue_gap(metric["revenueActual"], metric["revenueTarget"])
    is_revenue_risk = gap is not None and gap < -thresholds["revenueGap"]
    is_sla_miss = metric["slaAchieved"] < project["slaTargetRate"]
    is_turnover_risk = metric["turnoverRate"] > thresholds["turnoverRate"]
    is_risk = bool(metric.get("riskFlag")) or is_revenue_risk or is_sla_miss or is_turnover_risk

    return RiskVerdict(
        is_risk=is_risk,
        revenue_gap=gap,
        is_revenue_risk=is_revenue_risk,
        is_sla_miss=is_sla_miss,
        is_turnover_risk=is_turnover_risk,
    )


def flag_risky_metrics(metrics: list[dict], projects: list[dict], config: dict) -> list[dict]:
    """Return ``{metric, project, status}`` rows for every metric judged at risk.

    Metrics whose project code matches no project are skipped.
    """
    by_code = {p["projectCode"]: p for p in projects}
    rows = []
    for metric in metrics:
        project = by_code.get(metric["projectCode"])
        if project is None:
            continue
        verdict = evaluate_risk(metric, project, config)
        if verdict.is_risk:
            rows.append({"metric": metric, "project": project, "status": verdict.to_dict()})
    return rows
