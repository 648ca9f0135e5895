"""Tests for request, result and configuration schemas.

Tests cover:
- CheckRequest normalization and identifier rules
- Immutability of requests and config snapshots
- AgentResult usability and Finding severity helpers
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentResult,
    AgentStatus,
    CheckKind,
    CheckRequest,
    Finding,
    Severity,
)


class TestCheckRequest:
    def test_platform_alias_normalized(self) -> None:
        request = CheckRequest(platform=" X ", text="hello")
        assert request.platform == "twitter"

    @pytest.mark.parametrize("raw", ["@jack", "u/jack", "/u/jack", "jack"])
    def test_username_sigil_stripped(self, raw: str) -> None:
        request = CheckRequest(kind=CheckKind.ACCOUNT, platform="twitter", username=raw)
        assert request.username == "jack"
        assert request.identifier == "jack"

    def test_account_requires_username(self) -> None:
        with pytest.raises(PydanticValidationError):
            CheckRequest(kind=CheckKind.ACCOUNT, platform="twitter")

    def test_post_requires_identifier(self) -> None:
        with pytest.raises(PydanticValidationError):
            CheckRequest(kind=CheckKind.POST, platform="reddit")
        request = CheckRequest(kind=CheckKind.POST, platform="reddit", url="https://redd.it/abc")
        assert request.identifier == "https://redd.it/abc"

    def test_text_has_no_identifier(self) -> None:
        request = CheckRequest(platform="twitter", text="   ")
        assert request.identifier is None
        assert not request.has_text

    def test_frozen(self) -> None:
        request = CheckRequest(platform="twitter", text="hello")
        with pytest.raises(PydanticValidationError):
            request.text = "changed"


class TestAgentConfigSnapshot:
    def test_defaults_enable_everything(self) -> None:
        config = AgentConfigSnapshot()
        assert config.is_enabled("detection")
        assert config.for_agent("detection").weight is None
        assert "hashtags" in config.detection_types

    def test_with_agent_returns_new_snapshot(self) -> None:
        original = AgentConfigSnapshot()
        updated = original.with_agent("detection", enabled=False)
        assert original.is_enabled("detection")
        assert not updated.is_enabled("detection")

    def test_with_agent_keeps_other_fields(self) -> None:
        config = AgentConfigSnapshot().with_agent("predictive", weight=30)
        config = config.with_agent("predictive", enabled=False)
        assert config.for_agent("predictive").weight == 30

    def test_with_detection_types(self) -> None:
        config = AgentConfigSnapshot().with_detection_types(["links", "content"])
        assert config.detection_types == frozenset({"links", "content"})
        with pytest.raises(ValueError):
            AgentConfigSnapshot().with_detection_types(["smoke_signals"])


class TestAgentResult:
    def _result(self, **overrides) -> AgentResult:
        fields = dict(
            agent_id="detection",
            agent_name="Detection",
            factor=4,
            factor_name="Real-Time Detection",
            weight=25,
        )
        fields.update(overrides)
        return AgentResult(**fields)

    def test_usable(self) -> None:
        assert self._result(confidence=50).is_usable
        assert not self._result(status=AgentStatus.ERROR).is_usable
        assert not self._result(status=AgentStatus.DEGRADED, confidence=0).is_usable
        assert self._result(status=AgentStatus.DEGRADED, confidence=25).is_usable

    def test_scores_bounded(self) -> None:
        with pytest.raises(PydanticValidationError):
            self._result(raw_score=101)

    def test_finding_severity(self) -> None:
        assert Finding(code="x", message="x", severity=Severity.CRITICAL).is_high_severity
        assert not Finding(code="x", message="x", severity=Severity.MEDIUM).is_high_severity
