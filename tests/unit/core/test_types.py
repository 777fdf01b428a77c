"""Tests for core types."""

from datetime import datetime

import pytest

from modelwatch.core.types import (
    ChangeSet,
    CycleResult,
    FetchFailure,
    FetchSuccess,
    Resource,
    Snapshot,
    SourceDescriptor,
    SourceOutcome,
    utc_now_iso,
)


class TestUtcNowIso:
    """Tests for utc_now_iso."""

    def test_ends_with_z(self):
        """Timestamps are UTC with a Z suffix."""
        assert utc_now_iso().endswith("Z")

    def test_millisecond_precision(self):
        """Timestamps carry milliseconds and parse back."""
        value = utc_now_iso()
        assert len(value.split(".")[1]) == 4  # "123Z"
        datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestSourceDescriptor:
    """Tests for SourceDescriptor."""

    def test_headers_are_read_only(self, openai_source: SourceDescriptor):
        """Descriptor headers cannot be mutated."""
        with pytest.raises(TypeError):
            openai_source.headers["X-Extra"] = "1"

    def test_headers_copied_from_input(self):
        """Mutating the input mapping does not change the descriptor."""
        headers = {"Authorization": "Bearer {{KEY}}"}
        source = SourceDescriptor("a", "A", "https://a.example.com", headers)
        headers["Authorization"] = "changed"

        assert source.headers["Authorization"] == "Bearer {{KEY}}"

    def test_hashable(self, openai_source: SourceDescriptor):
        """Descriptors can be used in sets."""
        assert openai_source in {openai_source}

    def test_from_dict_defaults_name_to_id(self):
        """from_dict uses the id when no name is given."""
        source = SourceDescriptor.from_dict({"id": "groq", "endpoint": "https://groq.example.com"})

        assert source.name == "groq"
        assert dict(source.headers) == {}

    def test_from_dict_requires_endpoint(self):
        """from_dict raises KeyError without an endpoint."""
        with pytest.raises(KeyError):
            SourceDescriptor.from_dict({"id": "groq"})


class TestResource:
    """Tests for Resource."""

    def test_label_falls_back_to_id(self):
        """label is the id when the name is empty."""
        assert Resource(id="gpt-4o", name="").label == "gpt-4o"

    def test_label_prefers_name(self):
        assert Resource(id="claude-3", name="Claude 3").label == "Claude 3"

    def test_equality_includes_attributes(self):
        """Resources with the same id but different names are not equal."""
        assert Resource("m", "a") != Resource("m", "b")


class TestSnapshot:
    """Tests for Snapshot."""

    def test_from_fetch(self):
        """from_fetch copies resources, count and timestamp."""
        result = FetchSuccess(
            source_id="openai",
            resources=(Resource("gpt-4o", "gpt-4o"), Resource("o1", "o1")),
            timestamp="2024-05-01T10:00:00.000Z",
        )
        snapshot = Snapshot.from_fetch(result)

        assert snapshot.success is True
        assert snapshot.count == 2
        assert [r.id for r in snapshot.resources] == ["gpt-4o", "o1"]
        assert snapshot.timestamp == "2024-05-01T10:00:00.000Z"

    def test_to_dict_shape(self):
        """Persisted JSON uses provider/models keys and omits a missing error."""
        snapshot = Snapshot(
            source_id="openai",
            success=True,
            resources=[Resource("gpt-4o", "gpt-4o", 1715000000, "openai")],
            count=1,
            timestamp="2024-05-01T10:00:00.000Z",
        )
        data = snapshot.to_dict()

        assert data == {
            "success": True,
            "provider": "openai",
            "models": [
                {"id": "gpt-4o", "name": "gpt-4o", "created": 1715000000, "owned_by": "openai"}
            ],
            "count": 1,
            "timestamp": "2024-05-01T10:00:00.000Z",
        }

    def test_from_dict_restores_snapshot(self):
        snapshot = Snapshot(
            source_id="mistral",
            success=True,
            resources=[Resource("mistral-large", "mistral-large", None, "Mistral")],
            count=1,
            timestamp="2024-05-01T10:00:00.000Z",
        )

        assert Snapshot.from_dict(snapshot.to_dict()) == snapshot


class TestChangeSet:
    """Tests for ChangeSet."""

    def test_first_observation_should_notify(self):
        """A first observation warrants a notification even without changes flag."""
        changes = ChangeSet(added=(), is_first_observation=True)

        assert changes.has_changes is False
        assert changes.should_notify is True

    def test_unchanged_should_not_notify(self):
        assert ChangeSet().should_notify is False

    def test_changed_should_notify(self):
        changes = ChangeSet(added=(Resource("m", "m"),), has_changes=True)
        assert changes.should_notify is True

    def test_to_dict_first_observation_omits_has_changes(self):
        data = ChangeSet(is_first_observation=True).to_dict()

        assert data["isFirstTime"] is True
        assert "hasChanges" not in data

    def test_to_dict_includes_has_changes(self):
        data = ChangeSet(removed=(Resource("m", "m"),), has_changes=True).to_dict()

        assert data["isFirstTime"] is False
        assert data["hasChanges"] is True
        assert data["removed"][0]["id"] == "m"


class TestSourceOutcome:
    """Tests for SourceOutcome."""

    def test_failure_to_dict(self):
        """Failure outcomes carry provider, error and timestamp only."""
        failure = FetchFailure("xai", "HTTP 401: Unauthorized", "2024-05-01T10:00:00.000Z")
        outcome = SourceOutcome.from_failure(failure)

        assert outcome.to_dict() == {
            "success": False,
            "provider": "xai",
            "error": "HTTP 401: Unauthorized",
            "timestamp": "2024-05-01T10:00:00.000Z",
        }
        assert outcome.changed is False

    def test_success_to_dict_includes_changes(self):
        outcome = SourceOutcome(
            source_id="groq",
            success=True,
            timestamp="2024-05-01T10:00:00.000Z",
            resources=(Resource("llama3", "llama3"),),
            changes=ChangeSet(added=(Resource("llama3", "llama3"),), has_changes=True),
        )
        data = outcome.to_dict()

        assert data["count"] == 1
        assert data["models"][0]["id"] == "llama3"
        assert data["changes"]["hasChanges"] is True
        assert outcome.changed is True


class TestCycleResult:
    """Tests for CycleResult."""

    def test_summary_counts(self):
        """changed counts only outcomes with added or removed models."""
        outcomes = [
            SourceOutcome("a", True, "t", changes=ChangeSet(is_first_observation=True)),
            SourceOutcome("b", True, "t", changes=ChangeSet(added=(Resource("m", "m"),), has_changes=True)),
            SourceOutcome("c", True, "t", changes=ChangeSet()),
            SourceOutcome("d", False, "t", error="boom"),
        ]
        result = CycleResult(outcomes=outcomes)

        assert result.summary() == {"total": 4, "successful": 3, "failed": 1, "changed": 1}

    def test_empty_summary(self):
        assert CycleResult().summary() == {"total": 0, "successful": 0, "failed": 0, "changed": 0}
