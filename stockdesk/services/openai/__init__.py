"""
OpenAI assessment client.

Usage:
    from stockdesk.services.openai import (
        AssessmentRequest,
        build_assessment_request,
        request_assessment,
        parse_assessment,
    )
"""

from stockdesk.services.openai.client import (
    OpenAIClientManager,
    close_client_manager,
    get_client_manager,
)
from stockdesk.services.openai.config import (
    OpenAISettings,
    get_settings,
    is_reasoning_model,
)
from stockdesk.services.openai.contexts import (
    AssessmentRequest,
    build_assessment_request,
)
from stockdesk.services.openai.generate import (
    UsageMetrics,
    build_request_params,
    request_assessment,
)
from stockdesk.services.openai.prompts import INSTRUCTIONS, build_prompt
from stockdesk.services.openai.validation import (
    parse_assessment,
    strip_code_fences,
    validate_assessment,
)

__all__ = [
    # Client
    "OpenAIClientManager",
    "close_client_manager",
    "get_client_manager",
    # Config
    "OpenAISettings",
    "get_settings",
    "is_reasoning_model",
    # Request
    "AssessmentRequest",
    "build_assessment_request",
    "INSTRUCTIONS",
    "build_prompt",
    "build_request_params",
    # Generation
    "UsageMetrics",
    "request_assessment",
    # Validation
    "parse_assessment",
    "strip_code_fences",
    "validate_assessment",
]
