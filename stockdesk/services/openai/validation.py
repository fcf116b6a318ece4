"""
Parsing and validation of assessment responses.

The advisory service answers with JSON text, sometimes wrapped in a
markdown code fence. Anything that does not become a complete Assessment
is rejected with MalformedAssessmentError; nothing partial is returned.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from stockdesk.core.exceptions import MalformedAssessmentError
from stockdesk.core.logging import get_logger
from stockdesk.domain.assessment import Assessment

logger = get_logger("openai.validation")


FENCE_PATTERN = re.compile(r"```json|```", flags=re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and surrounding whitespace."""
    return FENCE_PATTERN.sub("", text).strip()


def validate_assessment(payload: Any, ticker: str | None = None) -> Assessment:
    """Validate decoded JSON into an Assessment."""
    if not isinstance(payload, dict):
        raise MalformedAssessmentError(
            message="Assessment response is not a JSON object",
            details={"ticker": ticker, "type": type(payload).__name__},
        )
    try:
        return Assessment.model_validate(payload)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        logger.warning(f"Assessment for {ticker or 'unknown'} failed validation: {errors}")
        raise MalformedAssessmentError(
            message="Assessment response is missing or has invalid fields",
            details={"ticker": ticker, "errors": errors},
        ) from e


def parse_assessment(text: str, ticker: str | None = None) -> Assessment:
    """
    Turn raw response text into a typed Assessment.

    Raises:
        MalformedAssessmentError: empty text, invalid JSON, or a payload
            that does not match the assessment schema.
    """
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        raise MalformedAssessmentError(
            message="Assessment response was empty",
            details={"ticker": ticker},
        )
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse assessment JSON for {ticker or 'unknown'}: {e}")
        raise MalformedAssessmentError(
            message="Assessment response is not valid JSON",
            details={"ticker": ticker, "error": str(e)},
        ) from e
    return validate_assessment(payload, ticker)
