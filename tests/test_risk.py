"""
Director OS
Tests — risk evaluator.

Covers:
    - revenue gap boundary (strict comparison) around the threshold
    - SLA miss, turnover and manual flag inputs
    - zero revenue target
    - flag_risky_metrics over the seed dataset
"""

import pytest

from director_os.seed_data import SEED_CONFIG, SEED_METRICS, SEED_PROJECTS, seed_copy
from director_os.services.risk import evaluate_risk, flag_risky_metrics, revenue_gap

CONFIG = {"riskThresholds": {"revenueGap": 0.05, "turnoverRate": 0.10}}
PROJECT = {"projectCode": "P1", "slaTargetRate": 0.95}


def _metric(**kw):
    metric = {
        "projectCode": "P1",
        "revenueActual": 100.0,
        "revenueTarget": 100.0,
        "slaAchieved": 0.99,
        "turnoverRate": 0.01,
        "riskFlag": False,
    }
    metric.update(kw)
    return metric


class TestRevenueBoundary:
    def test_exactly_at_threshold_is_not_risk(self):
        # (95 - 100) / 100 == -0.05, not below -0.05
        verdict = evaluate_risk(_metric(revenueActual=95.0), PROJECT, CONFIG)
        assert verdict.revenue_gap == pytest.approx(-0.05)
        assert verdict.is_revenue_risk is False
        assert verdict.is_risk is False

    def test_just_past_threshold_is_risk(self):
        verdict = evaluate_risk(_metric(revenueActual=94.99), PROJECT, CONFIG)
        assert verdict.is_revenue_risk is True
        assert verdict.is_risk is True

    @pytest.mark.parametrize("actual", [150.0, 100.0, 96.0])
    def test_on_or_above_target_is_not_revenue_risk(self, actual):
        verdict = evaluate_risk(_metric(revenueActual=actual), PROJECT, CONFIG)
        assert verdict.is_revenue_risk is False

    def test_gap_sign_convention(self):
        assert revenue_gap(110, 100) == pytest.approx(0.10)
        assert revenue_gap(90, 100) == pytest.approx(-0.10)


class TestOtherInputs:
    def test_sla_below_project_target(self):
        verdict = evaluate_risk(_metric(slaAchieved=0.94), PROJECT, CONFIG)
        assert verdict.is_sla_miss is True
        assert verdict.is_risk is True

    def test_sla_equal_to_target_is_fine(self):
        verdict = evaluate_risk(_metric(slaAchieved=0.95), PROJECT, CONFIG)
        assert verdict.is_sla_miss is False

    def test_turnover_strictly_above_threshold(self):
        assert evaluate_risk(_metric(turnoverRate=0.10), PROJECT, CONFIG).is_turnover_risk is False
        assert evaluate_risk(_metric(turnoverRate=0.11), PROJECT, CONFIG).is_turnover_risk is True

    def test_manual_flag_alone_is_risk(self):
        verdict = evaluate_risk(_metric(riskFlag=True), PROJECT, CONFIG)
        assert verdict.is_risk is True
        assert not (verdict.is_revenue_risk or verdict.is_sla_miss or verdict.is_turnover_risk)


class TestZeroTarget:
    def test_zero_target_has_no_revenue_signal(self):
        verdict = evaluate_risk(_metric(revenueActual=0.0, revenueTarget=0.0), PROJECT, CONFIG)
        assert verdict.revenue_gap is None
        assert verdict.is_revenue_risk is False
        assert verdict.is_risk is False

    def test_zero_target_still_checks_sla(self):
        verdict = evaluate_risk(_metric(revenueTarget=0.0, slaAchieved=0.5), PROJECT, CONFIG)
        assert verdict.is_risk is True


class TestSeedData:
    def test_met1_is_revenue_risk(self):
        met1 = next(m for m in SEED_METRICS if m["id"] == "met-1")
        alpha = next(p for p in SEED_PROJECTS if p["projectCode"] == "Project_Alpha")
        verdict = evaluate_risk(met1, alpha, SEED_CONFIG)
        assert verdict.revenue_gap == pytest.approx(-0.10)
        assert verdict.is_revenue_risk is True
        assert verdict.is_sla_miss is False
        assert verdict.is_risk is True

    def test_to_dict_uses_camel_case(self):
        verdict = evaluate_risk(SEED_METRICS[0], SEED_PROJECTS[0], SEED_CONFIG)
        assert set(verdict.to_dict()) == {
            "isRisk", "revenueGap", "isRevenueRisk", "isSlaMiss", "isTurnoverRisk",
        }

    def test_flag_risky_metrics_over_seed(self):
        rows = flag_risky_metrics(SEED_METRICS, SEED_PROJECTS, SEED_CONFIG)
        codes = sorted(r["project"]["projectCode"] for r in rows)
        # Sierra is healthy: 82000/80000, SLA 0.992 >= 0.99, no flag
        assert codes == ["Project_Alpha", "Project_Gemma", "Project_Tango"]

    def test_metrics_without_project_are_skipped(self):
        metrics = seed_copy(SEED_METRICS)
        metrics[0]["projectCode"] = "Project_Unknown"
        rows = flag_risky_metrics(metrics, SEED_PROJECTS, SEED_CONFIG)
        assert all(r["metric"]["projectCode"] != "Project_Unknown" for r in rows)
