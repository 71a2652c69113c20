"""ROI baseline collection: establish, load, refine and score the baseline."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from quallaa.config.settings import Settings, get_settings
from quallaa.engine.result import BaselineHealth
from quallaa.errors import (
    BaselineNotFoundError,
    ConfigurationError,
    StorageError,
    ValidationError,
)
from quallaa.models.baseline import Baseline
from quallaa.reports.baseline_report import NO_BASELINE_MESSAGE, render_baseline_report
from quallaa.storage.base import BASELINE_KEY, StorageBackend

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "development_cost",
    "current_saas_spend",
    "team_size",
    "current_processing_hours",
)

# Optional quality fields and their (min, max) domain
QUALITY_DOMAINS: dict[str, tuple[float, float]] = {
    "error_rate_baseline": (0.0, 1.0),
    "accuracy_baseline": (0.0, 1.0),
    "compliance_score": (0.0, 1.0),
    "customer_satisfaction_score": (1.0, 10.0),
}

_CAMEL_TO_SNAKE = {to_camel(name): name for name in Baseline.model_fields}

BASELINE_NOT_FOUND = (
    "ROI baseline required but not found. Run: quallaa evaluators baseline --help"
)
NOTHING_TO_UPDATE = "No baseline exists to update. Establish baseline first."


def _normalize_keys(inputs: Mapping[str, Any]) -> dict[str, Any]:
    """Accept camelCase keys (as used in the JSON files) alongside snake_case."""
    return {_CAMEL_TO_SNAKE.get(key, key): value for key, value in inputs.items()}


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _invalid(name: str, reason: str) -> ValidationError:
    # Messages name the field as it appears in the persisted JSON
    return ValidationError(f"Invalid {to_camel(name)}: {reason}", field=name)


def _validate_required(inputs: Mapping[str, Any], fields: tuple[str, ...]) -> None:
    for name in fields:
        value = inputs.get(name)
        if not _is_number(value) or value < 0:
            raise _invalid(name, "must be a positive number")

    if "team_size" in fields:
        team_size = inputs["team_size"]
        if team_size < 1 or team_size != int(team_size):
            raise _invalid("team_size", "must be a positive number")


def _validate_quality(inputs: Mapping[str, Any], allow_none: bool = True) -> None:
    for name, (low, high) in QUALITY_DOMAINS.items():
        if name not in inputs or (allow_none and inputs[name] is None):
            continue
        value = inputs[name]
        if not _is_number(value) or not (low <= value <= high):
            raise _invalid(name, f"must be between {low:g} and {high:g}")


class BaselineStore:
    """Persists the single ROI baseline of a project.

    The baseline is stored under the ``roi-baseline`` key of the injected
    storage backend and replaced wholesale on every write.
    """

    def __init__(self, storage: StorageBackend, settings: Optional[Settings] = None):
        self._storage = storage
        self._settings = settings or get_settings()

    async def establish_baseline(self, inputs: Mapping[str, Any]) -> Baseline:
        """Validate inputs, apply quality defaults and persist a new baseline.

        Any previously persisted baseline is overwritten.
        """
        values = _normalize_keys(inputs)
        _validate_required(values, REQUIRED_FIELDS)
        _validate_quality(values)

        fields = {
            name: values[name]
            for name in (*REQUIRED_FIELDS, *QUALITY_DOMAINS)
            if values.get(name) is not None
        }
        fields["team_size"] = int(fields["team_size"])
        baseline = Baseline(established_at=datetime.now(tz=timezone.utc), **fields)

        await self._save(baseline)

        logger.info("ROI baseline established at %s", baseline.established_at.isoformat())
        logger.info(
            "Development cost: $%s, SaaS spend: $%s/month, team: %d, processing: %s hours/month",
            f"{baseline.development_cost:,.2f}",
            f"{baseline.current_saas_spend:,.2f}",
            baseline.team_size,
            baseline.current_processing_hours,
        )
        return baseline

    async def get_baseline(self) -> Optional[Baseline]:
        """Load the persisted baseline, or None if there is none."""
        raw = await self._storage.read(BASELINE_KEY)
        if raw is None:
            return None
        try:
            return Baseline.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError) as exc:
            raise StorageError(
                f"Baseline record is unreadable: {exc}", key=BASELINE_KEY
            ) from exc

    async def update_baseline(self, updates: Mapping[str, Any]) -> Baseline:
        """Shallow-merge updates over the existing baseline and persist it.

        ``established_at`` is always kept from the existing record. Supplied
        fields are validated as on establishment, and a quality field cannot
        be cleared with None.
        """
        existing = await self.get_baseline()
        if existing is None:
            raise BaselineNotFoundError(NOTHING_TO_UPDATE)

        values = _normalize_keys(updates)
        values.pop("established_at", None)
        supplied = tuple(name for name in REQUIRED_FIELDS if name in values)
        _validate_required(values, supplied)
        _validate_quality(values, allow_none=False)

        known = {
            name: value for name, value in values.items() if name in Baseline.model_fields
        }
        if "team_size" in known:
            known["team_size"] = int(known["team_size"])
        updated = existing.model_copy(update=known)

        await self._save(updated)
        logger.info("ROI baseline updated: %s", ", ".join(sorted(known)) or "no changes")
        return updated

    async def require_baseline(self) -> Baseline:
        """Return the baseline or fail with an actionable error.

        A baseline older than the staleness window is still returned; only a
        warning is logged.
        """
        if not self._settings.baseline_required:
            raise ConfigurationError("Baseline validation disabled in config")

        baseline = await self.get_baseline()
        if baseline is None:
            raise BaselineNotFoundError(BASELINE_NOT_FOUND)

        months_old = baseline.age_months()
        if months_old > self._settings.baseline_stale_months:
            logger.warning(
                "Baseline is %.1f months old. Consider refreshing.", months_old
            )
        return baseline

    def calculate_baseline_health(self, baseline: Baseline) -> BaselineHealth:
        """Score how usable the baseline is for ROI measurement."""
        issues: list[str] = []
        recommendations: list[str] = []
        score = 100

        # Financial completeness
        if baseline.development_cost <= 0:
            issues.append("Development cost not specified")
            recommendations.append("Update baseline with actual development investment")
            score -= 25

        if baseline.current_saas_spend <= 0:
            issues.append("Current SaaS spend not specified")
            recommendations.append("Document current tool subscriptions to measure savings")
            score -= 20

        # Operational metrics
        if baseline.team_size <= 0:
            issues.append("Team size not specified")
            recommendations.append("Specify team size for productivity impact calculations")
            score -= 15

        if baseline.current_processing_hours <= 0:
            issues.append("Current processing hours not measured")
            recommendations.append(
                "Measure current manual processing time for automation impact"
            )
            score -= 20

        # Quality baselines
        if baseline.accuracy_baseline < 0.5:
            issues.append("Accuracy baseline suspiciously low")
            recommendations.append("Verify accuracy baseline measurement methodology")
            score -= 10

        if baseline.error_rate_baseline > 0.2:
            issues.append("Error rate baseline high (>20%)")
            recommendations.append(
                "High error rates indicate significant improvement opportunity"
            )
            score -= 10

        return BaselineHealth(score=score, issues=issues, recommendations=recommendations)

    async def generate_baseline_report(self) -> str:
        """Render the stakeholder report for the current baseline."""
        baseline = await self.get_baseline()
        if baseline is None:
            return NO_BASELINE_MESSAGE
        return render_baseline_report(baseline, self.calculate_baseline_health(baseline))

    async def _save(self, baseline: Baseline) -> None:
        await self._storage.ensure_container(BASELINE_KEY)
        payload = json.dumps(baseline.to_json_dict(), indent=2)
        await self._storage.write(BASELINE_KEY, payload.encode("utf-8"))
