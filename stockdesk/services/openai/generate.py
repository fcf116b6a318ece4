"""
Assessment generation via the OpenAI Responses API.

request_assessment() is the advisory-service collaborator the simulation
controller awaits. It either returns a fully validated Assessment or
raises an AssessmentError subclass; it never returns partial data.

Only transport failures (connection errors, timeouts, rate limits, 5xx)
are retried, with exponential backoff. A bad answer is not retried: the
caller decides whether to try again.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import openai
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from stockdesk.core.exceptions import AssessmentUnavailableError
from stockdesk.core.logging import get_logger
from stockdesk.domain.assessment import Assessment
from stockdesk.services.openai.client import OpenAIClientManager, get_client_manager
from stockdesk.services.openai.config import (
    OpenAISettings,
    get_settings,
    is_reasoning_model,
)
from stockdesk.services.openai.contexts import AssessmentRequest
from stockdesk.services.openai.prompts import INSTRUCTIONS, build_prompt
from stockdesk.services.openai.validation import parse_assessment

logger = get_logger("openai.generate")


TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
)


@dataclass
class UsageMetrics:
    """Metrics from an API call."""
    input_tokens: int = 0
    output_tokens: int = 0
    duration_ms: int = 0
    model: str = ""

    @classmethod
    def from_response(cls, response: Any, model: str, started: datetime) -> UsageMetrics:
        usage = getattr(response, "usage", None)
        return cls(
            input_tokens=getattr(usage, "input_tokens", 0) if usage else 0,
            output_tokens=getattr(usage, "output_tokens", 0) if usage else 0,
            duration_ms=int((datetime.now(UTC) - started).total_seconds() * 1000),
            model=model,
        )


def build_request_params(
    request: AssessmentRequest,
    settings: OpenAISettings,
    model: str | None = None,
) -> dict[str, Any]:
    """Assemble keyword arguments for ``client.responses.create``."""
    model = model or settings.default_model
    params: dict[str, Any] = {
        "model": model,
        "instructions": INSTRUCTIONS,
        "input": build_prompt(request, settings.assessment_as_of),
        "max_output_tokens": settings.max_output_tokens,
        "store": False,
    }
    # Reasoning models reject temperature
    if is_reasoning_model(model):
        params["reasoning"] = {"effort": "low"}
    else:
        params["temperature"] = settings.temperature
    return params


async def request_assessment(
    request: AssessmentRequest,
    *,
    manager: OpenAIClientManager | None = None,
    settings: OpenAISettings | None = None,
    model: str | None = None,
) -> Assessment:
    """
    Ask the model for an assessment of one instrument.

    Raises:
        AssessmentUnavailableError: no API key, open circuit breaker, or the
            API could not be reached after all transport attempts.
        MalformedAssessmentError: the answer was not a valid assessment.
    """
    settings = settings or get_settings()
    manager = manager or get_client_manager()

    client = await manager.get_client()
    if client is None:
        raise AssessmentUnavailableError(
            message="Assessment service is not configured or is cooling down",
            details={"ticker": request.ticker},
        )

    params = build_request_params(request, settings, model)
    started = datetime.now(UTC)

    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(settings.max_retries),
            wait=wait_exponential_jitter(
                initial=settings.retry_delay,
                max=settings.retry_max_delay,
                jitter=1.0,
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                response = await client.responses.create(**params)
    except openai.OpenAIError as e:
        manager.record_failure()
        logger.error(f"Assessment request for {request.ticker} failed: {e}")
        raise AssessmentUnavailableError(
            details={"ticker": request.ticker, "error": str(e)},
        ) from e

    manager.record_success()

    metrics = UsageMetrics.from_response(response, params["model"], started)
    logger.info(
        f"[ASSESSMENT] {request.ticker} - "
        f"{metrics.input_tokens} in / {metrics.output_tokens} out tokens, "
        f"{metrics.duration_ms}ms"
    )

    return parse_assessment(response.output_text or "", request.ticker)
