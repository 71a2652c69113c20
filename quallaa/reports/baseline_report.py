"""Stakeholder report for the ROI baseline."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from quallaa.engine.result import BaselineHealth
from quallaa.models.baseline import Baseline

NO_BASELINE_MESSAGE = "No baseline established. Run: quallaa evaluators baseline"


def money(value: float) -> str:
    """Format a currency amount, dropping the cents on whole amounts."""
    if float(value).is_integer():
        return f"${value:,.0f}"
    return f"${value:,.2f}"


def render_baseline_report(
    baseline: Baseline,
    health: BaselineHealth,
    now: Optional[datetime] = None,
) -> str:
    """Render the markdown baseline report.

    Output is a pure function of the baseline, its health and ``now``.
    """
    months_old = baseline.age_months(now)
    hourly_cost = (
        baseline.current_saas_spend / baseline.current_processing_hours
        if baseline.current_processing_hours > 0
        else 0.0
    )

    if health.issues:
        issues = "### Issues\n" + "\n".join(f"- ⚠️ {issue}" for issue in health.issues)
    else:
        issues = "✅ No issues detected"

    if health.recommendations:
        recommendations = "### Recommendations\n" + "\n".join(
            f"- 💡 {rec}" for rec in health.recommendations
        )
    else:
        recommendations = ""

    return f"""# ROI Baseline Report

## Baseline Overview
- **Established:** {baseline.established_at.strftime('%Y-%m-%d')}
- **Age:** {months_old:.1f} months
- **Health Score:** {health.score}/100

## Financial Baseline
- **Development Investment:** {money(baseline.development_cost)}
- **Current SaaS Spending:** {money(baseline.current_saas_spend)}/month
- **Annual SaaS Cost:** {money(baseline.current_saas_spend * 12)}

## Operational Baseline
- **Team Size:** {baseline.team_size} members
- **Processing Hours:** {baseline.current_processing_hours:g} hours/month
- **Hourly Processing Cost:** ${hourly_cost:.2f}

## Quality Baseline
- **Accuracy:** {baseline.accuracy_baseline * 100:.1f}%
- **Error Rate:** {baseline.error_rate_baseline * 100:.1f}%
- **Compliance Score:** {baseline.compliance_score * 100:.1f}%
- **Customer Satisfaction:** {baseline.customer_satisfaction_score:g}/10

## Health Assessment
{issues}

{recommendations}

---
*Generated by Quallaa ROI Tracking System*
"""
