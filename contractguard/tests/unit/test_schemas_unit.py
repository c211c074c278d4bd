"""
Unit tests for the analysis schemas.
"""

import pytest
from pydantic import ValidationError

from contractguard.models.schemas import AnalysisResult, AnalyzeRequest, RedFlag, Severity


class TestAnalysisResult:

    def test_parses_camel_case_wire_format(self, sample_analysis_payload):
        result = AnalysisResult.model_validate(sample_analysis_payload)

        assert result.summary == sample_analysis_payload["summary"]
        assert [f.issue for f in result.red_flags] == [
            "Perpetual usage rights", "12-month exclusivity", "Net-90 payment"
        ]
        assert result.negotiable_terms[0].term == "Usage rights"
        assert result.questions_to_ask[-1] == "Can payment be Net-30?"

    def test_dumps_back_to_the_same_shape(self, sample_analysis_payload):
        result = AnalysisResult.model_validate(sample_analysis_payload)
        assert result.model_dump(mode="json", by_alias=True) == sample_analysis_payload

    def test_collections_default_to_empty(self):
        result = AnalysisResult.model_validate({"summary": "Nothing notable."})

        assert result.red_flags == []
        assert result.negotiable_terms == []
        assert result.questions_to_ask == []

    def test_summary_is_required(self):
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate({"redFlags": []})

    def test_result_is_frozen(self, sample_analysis_payload):
        result = AnalysisResult.model_validate(sample_analysis_payload)
        with pytest.raises(ValidationError):
            result.summary = "changed"

    def test_unknown_fields_are_dropped(self):
        result = AnalysisResult.model_validate({"summary": "s", "overallScore": 7})
        assert "overallScore" not in result.model_dump(mode="json", by_alias=True)


class TestRedFlag:

    @pytest.mark.parametrize("raw,expected", [
        ("high", Severity.HIGH),
        ("High", Severity.HIGH),
        (" MEDIUM ", Severity.MEDIUM),
        ("low", Severity.LOW),
    ])
    def test_severity_normalised(self, raw, expected):
        flag = RedFlag.model_validate({"issue": "i", "severity": raw, "explanation": "e"})
        assert flag.severity is expected

    @pytest.mark.parametrize("raw", ["critical", "", 3, None])
    def test_unknown_severity_rejected(self, raw):
        with pytest.raises(ValidationError):
            RedFlag.model_validate({"issue": "i", "severity": raw, "explanation": "e"})

    def test_missing_explanation_rejected(self):
        with pytest.raises(ValidationError):
            RedFlag.model_validate({"issue": "i", "severity": "low"})


class TestAnalyzeRequest:

    def test_reads_camel_case_body(self):
        request = AnalyzeRequest.model_validate(
            {"contractText": "text", "email": "user@example.com"}
        )
        assert request.contract_text == "text"

    @pytest.mark.parametrize("body", [
        {"email": "user@example.com"},
        {"contractText": "", "email": "user@example.com"},
        {"contractText": 12, "email": "user@example.com"},
        {"contractText": "text", "email": None},
    ])
    def test_rejects_missing_or_non_string(self, body):
        with pytest.raises(ValidationError):
            AnalyzeRequest.model_validate(body)
