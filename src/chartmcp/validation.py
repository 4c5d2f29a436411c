"""Schema-driven argument validation.

Validation is per chart type: each ``ChartSpec`` may carry a pydantic
schema, and chart types without one skip validation.  A failure yields a
single aggregated message listing every violation; the arguments are
never partially applied.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .charts.registry import get_spec
from .models import ChartType, Invalid, Valid, ValidationOutcome

logger = logging.getLogger(__name__)


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ``ValidationError`` into one readable line."""
    issues: list[str] = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc", ())) or "(root)"
        issues.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "Invalid parameters: " + "; ".join(issues)


def validate_arguments(chart_type: ChartType, arguments: dict[str, Any]) -> ValidationOutcome:
    """Validate *arguments* against the schema registered for *chart_type*.

    Returns ``Valid`` with the sanitized, wire-shaped arguments (defaults
    filled in, unknown keys dropped) or ``Invalid`` with the aggregated
    message.  A ``ValidateError`` raised by a semantic check inside the
    schema propagates to the caller unchanged.
    """
    schema = get_spec(chart_type).schema
    if schema is None:
        return Valid(arguments=dict(arguments))

    try:
        model = schema.model_validate(arguments)
    except ValidationError as exc:
        message = format_validation_error(exc)
        logger.debug("Validation failed for %s: %s", chart_type.value, message)
        return Invalid(message=message)

    return Valid(arguments=model.model_dump(by_alias=True, exclude_none=True))
