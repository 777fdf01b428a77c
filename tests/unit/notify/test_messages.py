"""Tests for notification message rendering."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from modelwatch.core.types import ChangeSet, FetchFailure, Resource, SourceDescriptor
from modelwatch.notify.messages import format_time, render_change, render_failure
from tests.fakes import make_fetch_success, make_source

MOMENT = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def source() -> SourceDescriptor:
    return make_source("openai", "OPENAI_API_KEY", name="OpenAI")


class TestFormatTime:
    """Tests for format_time."""

    def test_utc(self):
        assert format_time("UTC", MOMENT) == "2024-05-01 10:30"

    def test_named_zone(self):
        try:
            ZoneInfo("Asia/Shanghai")
        except ZoneInfoNotFoundError:
            pytest.skip("timezone database not available")

        assert format_time("Asia/Shanghai", MOMENT) == "2024-05-01 18:30"

    def test_unknown_zone_falls_back_to_utc(self):
        assert format_time("Mars/Olympus_Mons", MOMENT) == "2024-05-01 10:30"


class TestRenderChange:
    """Tests for render_change."""

    def test_first_observation(self, source):
        current = make_fetch_success("openai", ["gpt-4o", "o1"])
        changes = ChangeSet(added=current.resources, is_first_observation=True)

        message = render_change(source, changes, current, "2024-05-01 10:30")

        assert message.startswith("🆕 <b>Model provider: OpenAI</b>")
        assert "First observation" in message
        assert "📊 Current models: 2" in message
        assert "Added models" not in message
        assert message.endswith("⏰ Updated: 2024-05-01 10:30")

    def test_added_and_removed(self, source):
        current = make_fetch_success("openai", ["gpt-4o", "o1"])
        changes = ChangeSet(
            added=(Resource("o1", "o1"),),
            removed=(Resource("gpt-4", "gpt-4"), Resource("gpt-3.5", "gpt-3.5")),
            has_changes=True,
        )

        message = render_change(source, changes, current, "2024-05-01 10:30")

        assert message.startswith("🔔 <b>Model provider: OpenAI</b>")
        assert "<b>➕ Added models (1):</b>\n  • o1\n" in message
        assert "<b>➖ Removed models (2):</b>\n  • gpt-4\n  • gpt-3.5\n" in message
        assert "📊 Total models: 2" in message

    def test_only_removed_omits_added_heading(self, source):
        current = make_fetch_success("openai", [])
        changes = ChangeSet(removed=(Resource("gpt-4", "gpt-4"),), has_changes=True)

        message = render_change(source, changes, current, "t")

        assert "Added models" not in message
        assert "Removed models (1)" in message

    def test_uses_display_name(self, source):
        current = make_fetch_success("openai", [])
        changes = ChangeSet(added=(Resource("claude-3-opus", "Claude 3 Opus"),), has_changes=True)

        message = render_change(source, changes, current, "t")

        assert "  • Claude 3 Opus" in message

    def test_escapes_html(self):
        source = SourceDescriptor("evil", "A & B <Labs>", "https://evil.example.com")
        current = make_fetch_success("evil", [])
        changes = ChangeSet(added=(Resource("x", "<script>"),), has_changes=True)

        message = render_change(source, changes, current, "t")

        assert "A &amp; B &lt;Labs&gt;" in message
        assert "&lt;script&gt;" in message
        assert "<script>" not in message


class TestRenderFailure:
    """Tests for render_failure."""

    def test_failure_message(self, source):
        failure = FetchFailure("openai", "HTTP 401: Unauthorized", "t")

        message = render_failure(source, failure, {"OPENAI_API_KEY"}, "2024-05-01 10:30")

        assert message.startswith("❌ <b>Monitoring failed: OpenAI</b>")
        assert "<code>HTTP 401: Unauthorized</code>" in message
        assert "🔑 <b>Required configuration:</b>\n  • OPENAI_API_KEY\n" in message
        assert message.endswith("⏰ Time: 2024-05-01 10:30")

    def test_secrets_sorted(self, source):
        failure = FetchFailure("openai", "boom", "t")

        message = render_failure(source, failure, ["Z_KEY", "A_KEY"], "t")

        assert message.index("A_KEY") < message.index("Z_KEY")

    def test_no_secrets_section_without_secrets(self, source):
        failure = FetchFailure("openai", "boom", "t")

        message = render_failure(source, failure, [], "t")

        assert "Required configuration" not in message

    def test_error_escaped(self, source):
        failure = FetchFailure("openai", "HTTP 502: Bad Gateway - <html>oops</html>", "t")

        message = render_failure(source, failure, [], "t")

        assert "&lt;html&gt;oops&lt;/html&gt;" in message
