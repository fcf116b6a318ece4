"""Tests for assessment response parsing and validation."""

from __future__ import annotations

import json

import pytest

from stockdesk.core.exceptions import MalformedAssessmentError
from stockdesk.domain.assessment import EntryUrgency, Rating, SellSignal
from stockdesk.services.openai.validation import (
    parse_assessment,
    strip_code_fences,
    validate_assessment,
)


class TestStripCodeFences:
    """Markdown fences around the JSON are removed."""

    @pytest.mark.parametrize(
        "text",
        [
            '```json\n{"a": 1}\n```',
            '```\n{"a": 1}\n```',
            '{"a": 1}',
            '  ```JSON{"a": 1}```  ',
        ],
    )
    def test_variants(self, text: str):
        assert strip_code_fences(text) == '{"a": 1}'


class TestParseAssessment:
    """Raw text to typed Assessment."""

    def test_valid_fenced(self, assessment_payload):
        text = f"```json\n{json.dumps(assessment_payload)}\n```"
        assessment = parse_assessment(text, "TEST")

        assert assessment.rating is Rating.BUY
        assert assessment.rating.level == 4
        assert assessment.upside_pct == 15.3
        assert assessment.entry_point.entry_low == 97.0
        assert assessment.entry_point.urgency is EntryUrgency.WAIT
        assert assessment.sell_sentiment.sell_signal is SellSignal.HOLD
        assert assessment.entry_point.urgency_label == "WAIT FOR DIP"
        assert assessment.sell_sentiment.sell_signal_label == "HOLD POSITION"
        assert assessment.hold_strategy.review_triggers == ["Guidance cut", "Margin miss"]

    def test_optional_text_fields(self, assessment_payload):
        del assessment_payload["thesis"]
        del assessment_payload["keyRisks"]
        assessment = validate_assessment(assessment_payload)
        assert assessment.thesis == ""
        assert assessment.key_risks == []

    def test_invalid_json(self):
        with pytest.raises(MalformedAssessmentError) as exc_info:
            parse_assessment("{not json", "TEST")
        assert exc_info.value.status_code == 502

    def test_empty(self):
        with pytest.raises(MalformedAssessmentError):
            parse_assessment("```json\n```", "TEST")

    def test_not_an_object(self):
        with pytest.raises(MalformedAssessmentError):
            parse_assessment("[1, 2, 3]", "TEST")

    @pytest.mark.parametrize(
        "path",
        [
            ("rating",),
            ("entryPoint",),
            ("entryPoint", "entryLow"),
            ("entryPoint", "urgency"),
            ("sellSentiment", "stopLoss"),
        ],
    )
    def test_missing_required(self, assessment_payload, path):
        target = assessment_payload
        for key in path[:-1]:
            target = target[key]
        del target[path[-1]]

        with pytest.raises(MalformedAssessmentError) as exc_info:
            validate_assessment(assessment_payload, "TEST")
        assert exc_info.value.details["errors"]

    def test_unknown_enum_value(self, assessment_payload):
        assessment_payload["rating"] = "MAYBE"
        with pytest.raises(MalformedAssessmentError):
            validate_assessment(assessment_payload)

    def test_inverted_entry_zone(self, assessment_payload):
        assessment_payload["entryPoint"]["entryLow"] = 120.0
        with pytest.raises(MalformedAssessmentError):
            validate_assessment(assessment_payload)

    def test_frozen(self, assessment_payload):
        assessment = validate_assessment(assessment_payload)
        with pytest.raises(Exception):
            assessment.target_price = 1.0
