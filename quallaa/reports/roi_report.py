"""Plain-language business case built from a project's snapshot history."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from quallaa.config.settings import Settings, get_settings
from quallaa.errors import InsufficientDataError
from quallaa.models.baseline import Baseline
from quallaa.models.snapshot import ROISnapshot
from quallaa.reports.baseline_report import money

HOURS_PER_WORK_WEEK = 40


def _months(value: float) -> str:
    return "never" if math.isinf(value) else f"{value:g} months"


def render_roi_report(
    baseline: Baseline,
    snapshots: Sequence[ROISnapshot],
    settings: Optional[Settings] = None,
) -> str:
    """Render the business case from the latest snapshot.

    Raises InsufficientDataError when there are no snapshots yet.
    """
    if not snapshots:
        raise InsufficientDataError("No data yet. Run: quallaa evaluators check")
    settings = settings or get_settings()

    metrics = snapshots[-1].metrics
    roi = metrics.financial.current_roi
    break_even = metrics.financial.break_even_months
    savings = metrics.financial.cumulative_savings
    hours_saved = metrics.productivity.time_saved_hours
    adoption = metrics.productivity.employee_adoption_rate
    roi_target = settings.roi_target * 100
    payback_target = settings.payback_months_target
    adoption_target = settings.adoption_rate_target * 100

    lines = ["# Your Project's Business Case", ""]

    if roi > 0:
        lines.append("## ✅ Is it worth it? Yes.")
        lines.append("")
        lines.append(f"Your project is generating a **{roi:.0f}% return** on investment.")
        if roi > roi_target:
            lines.append("That beats the industry average by a lot.")
        else:
            lines.append("That's a solid return.")
    else:
        lines.append("## ⏳ Is it worth it? Not yet.")
        lines.append("")
        lines.append(
            f"Your project is at **{roi:.0f}% ROI**. "
            "You're not there yet, but you might get there."
        )
    lines.append("")

    lines.append("## 💡 When will you break even?")
    lines.append("")
    if math.isinf(break_even):
        lines.append("Not at current savings. Monthly costs outweigh monthly savings.")
    elif break_even < 6:
        lines.append(f"In **{_months(break_even)}**. That's fast.")
    elif break_even < 12:
        lines.append(f"In **{_months(break_even)}**. Pretty reasonable.")
    elif break_even < 24:
        lines.append(f"In **{_months(break_even)}**. That's getting long.")
    else:
        lines.append(f"In **{_months(break_even)}**. That's quite long. Worth reconsidering?")
    lines.append("")

    lines.append("## 💰 What's working?")
    lines.append("")
    if savings > 1000:
        lines.append(f"- You've saved **{money(savings)}** so far")
    if hours_saved > 0:
        weeks_of_work = math.floor(hours_saved / HOURS_PER_WORK_WEEK)
        if weeks_of_work > 1:
            lines.append(
                f"- You've saved **{hours_saved:,.0f} hours** of manual work "
                f"(like {weeks_of_work} weeks of full-time work)"
            )
        else:
            lines.append(f"- You've saved **{hours_saved:,.0f} hours** of manual work")
    if adoption > 70:
        lines.append(f"- **{adoption:.0f}%** of your team actively uses this (that's great!)")
    elif adoption > 50:
        lines.append(f"- **{adoption:.0f}%** of your team uses this (pretty good)")
    else:
        lines.append(f"- Only **{adoption:.0f}%** of your team uses this (room for improvement)")
    lines.append("")

    lines.append("## 📊 How do you compare?")
    lines.append("")
    if break_even <= payback_target:
        lines.append(
            f"- **Payback speed:** ✅ Industry best practice is under "
            f"{payback_target:g} months. You're there."
        )
    else:
        lines.append(
            f"- **Payback speed:** ⚠️ Industry best practice is under "
            f"{payback_target:g} months. You're at {_months(break_even)}."
        )
    if adoption >= adoption_target:
        lines.append(
            f"- **Team adoption:** ✅ Research shows {adoption_target:.0f}%+ is strong. "
            f"You're at {adoption:.0f}%."
        )
    else:
        lines.append(
            f"- **Team adoption:** ⚠️ Research shows {adoption_target:.0f}%+ is strong. "
            f"You're at {adoption:.0f}%."
        )
    if roi >= roi_target:
        lines.append(
            f"- **ROI:** ✅ Top companies see {roi_target:.0f}% returns. You're at {roi:.0f}%."
        )
    elif roi > 100:
        lines.append(
            f"- **ROI:** 📈 Top companies see {roi_target:.0f}% returns. "
            f"You're at {roi:.0f}% (positive is good)."
        )
    else:
        lines.append(
            f"- **ROI:** ⏳ Top companies see {roi_target:.0f}% returns. "
            f"You're at {roi:.0f}% (still growing)."
        )
    lines.append("")

    lines.append("## 📈 Your data over time")
    lines.append("")
    lines.append(f"Tracking since: {baseline.established_at.strftime('%Y-%m-%d')}")
    lines.append(f"Data points: {len(snapshots)}")
    if len(snapshots) >= 2:
        lines.append("Trend analysis: Available")
    else:
        lines.append("Trend analysis: Need more data points")
    lines.append("")
    lines.append("---")
    lines.append(
        "*Questions? The math is based on research from Forrester, BCG, and METR studies.*"
    )
    return "\n".join(lines)
