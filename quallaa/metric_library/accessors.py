"""Metric paths available to trend analysis.

Each path is the snake_case attribute chain on ROIMetrics; the camelCase
alias matches the keys in the persisted snapshot log.
"""

from quallaa.metric_library.registry import register_metric
from quallaa.models.metrics import ROIMetrics


# Financial


@register_metric("financial.current_roi", "ROI (%)", aliases=("financial.currentROI",))
def current_roi(m: ROIMetrics) -> float:
    return m.financial.current_roi


@register_metric(
    "financial.cumulative_savings",
    "Cumulative savings",
    aliases=("financial.cumulativeSavings",),
)
def cumulative_savings(m: ROIMetrics) -> float:
    return m.financial.cumulative_savings


@register_metric(
    "financial.saas_replacement_savings",
    "SaaS replacement savings",
    aliases=("financial.saasReplacementSavings",),
)
def saas_replacement_savings(m: ROIMetrics) -> float:
    return m.financial.saas_replacement_savings


@register_metric(
    "financial.operational_cost_reduction",
    "Operational cost reduction",
    aliases=("financial.operationalCostReduction",),
)
def operational_cost_reduction(m: ROIMetrics) -> float:
    return m.financial.operational_cost_reduction


@register_metric(
    "financial.maintenance_costs",
    "Maintenance costs",
    aliases=("financial.maintenanceCosts",),
)
def maintenance_costs(m: ROIMetrics) -> float:
    return m.financial.maintenance_costs


@register_metric(
    "financial.development_cost",
    "Development cost",
    aliases=("financial.developmentCost",),
)
def development_cost(m: ROIMetrics) -> float:
    return m.financial.development_cost


@register_metric(
    "financial.break_even_months",
    "Break-even (months)",
    aliases=("financial.breakEvenMonths",),
)
def break_even_months(m: ROIMetrics) -> float:
    return m.financial.break_even_months


# Productivity


@register_metric(
    "productivity.time_saved_hours",
    "Time saved (hours)",
    aliases=("productivity.timeSavedHours",),
)
def time_saved_hours(m: ROIMetrics) -> float:
    return m.productivity.time_saved_hours


@register_metric(
    "productivity.tasks_automated",
    "Tasks automated",
    aliases=("productivity.tasksAutomated",),
)
def tasks_automated(m: ROIMetrics) -> float:
    return m.productivity.tasks_automated


@register_metric(
    "productivity.error_reduction_rate",
    "Error reduction (%)",
    aliases=("productivity.errorReductionRate",),
)
def error_reduction_rate(m: ROIMetrics) -> float:
    return m.productivity.error_reduction_rate


@register_metric(
    "productivity.employee_adoption_rate",
    "Team adoption (%)",
    aliases=("productivity.employeeAdoptionRate",),
)
def employee_adoption_rate(m: ROIMetrics) -> float:
    return m.productivity.employee_adoption_rate


@register_metric(
    "productivity.processing_time_reduction",
    "Processing time reduction (%)",
    aliases=("productivity.processingTimeReduction",),
)
def processing_time_reduction(m: ROIMetrics) -> float:
    return m.productivity.processing_time_reduction


@register_metric(
    "productivity.throughput_increase",
    "Throughput increase (%)",
    aliases=("productivity.throughputIncrease",),
)
def throughput_increase(m: ROIMetrics) -> float:
    return m.productivity.throughput_increase


# Quality


@register_metric(
    "quality.defect_reduction", "Defect reduction (%)", aliases=("quality.defectReduction",)
)
def defect_reduction(m: ROIMetrics) -> float:
    return m.quality.defect_reduction


@register_metric(
    "quality.customer_satisfaction_delta",
    "Customer satisfaction delta",
    aliases=("quality.customerSatisfactionDelta",),
)
def customer_satisfaction_delta(m: ROIMetrics) -> float:
    return m.quality.customer_satisfaction_delta


@register_metric(
    "quality.compliance_improvement",
    "Compliance improvement (%)",
    aliases=("quality.complianceImprovement",),
)
def compliance_improvement(m: ROIMetrics) -> float:
    return m.quality.compliance_improvement


@register_metric(
    "quality.accuracy_improvement",
    "Accuracy improvement (%)",
    aliases=("quality.accuracyImprovement",),
)
def accuracy_improvement(m: ROIMetrics) -> float:
    return m.quality.accuracy_improvement


@register_metric(
    "quality.review_cycle_reduction",
    "Review cycle reduction (%)",
    aliases=("quality.reviewCycleReduction",),
)
def review_cycle_reduction(m: ROIMetrics) -> float:
    return m.quality.review_cycle_reduction


# Confidence interval bounds


@register_metric(
    "confidence_interval.lower", "ROI lower bound", aliases=("confidenceInterval.lower",)
)
def confidence_lower(m: ROIMetrics) -> float:
    return m.confidence_interval.lower


@register_metric(
    "confidence_interval.upper", "ROI upper bound", aliases=("confidenceInterval.upper",)
)
def confidence_upper(m: ROIMetrics) -> float:
    return m.confidence_interval.upper
