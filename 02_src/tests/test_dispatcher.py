"""Tests for ToolDispatcher."""

import json
from unittest.mock import AsyncMock

import pytest

from bug_agent.dispatcher import REQUEST_TYPES, ToolDispatcher, parse_request
from bug_agent.errors import (
    HostError,
    MissingFieldError,
    UndeterminableToolError,
    UnknownToolError,
)
from bug_agent.models import ReadFileContentRequest, ToolName


def _events(subscriber) -> list[dict]:
    return [json.loads(frame[len("data: ") : -2]) for frame in subscriber.frames]


class TestLogConversation:
    """Tests for the log_conversation tool."""

    @pytest.mark.asyncio
    async def test_missing_status(self, dispatcher):
        """Test that a missing status fails with a required-field error."""
        result = await dispatcher.dispatch(ToolName.LOG_CONVERSATION, {})

        assert result.success is False
        assert "required" in result.error

    @pytest.mark.asyncio
    async def test_status_with_default_type(self, dispatcher):
        """Test success envelope with default type."""
        result = await dispatcher.dispatch(ToolName.LOG_CONVERSATION, {"status": "x"})

        assert result.success is True
        assert result.data == {"status": "x", "type": "info"}

    @pytest.mark.asyncio
    async def test_broadcasts_event_as_given(self, dispatcher, subscriber):
        """Test that the event reaches subscribers unchanged."""
        await dispatcher.dispatch(
            "log_conversation",
            {"status": "Found it", "type": "resolved", "metadata": {"file": "a.js"}},
        )

        events = _events(subscriber)
        assert len(events) == 1
        assert events[0]["status"] == "Found it"
        assert events[0]["type"] == "resolved"
        assert events[0]["metadata"] == {"file": "a.js"}

    @pytest.mark.asyncio
    async def test_missing_status_broadcasts_error(self, dispatcher, subscriber):
        """Test that failures are published as error events."""
        await dispatcher.dispatch(ToolName.LOG_CONVERSATION, {"type": "info"})

        events = _events(subscriber)
        assert events[-1]["type"] == "error"
        assert "required" in events[-1]["metadata"]["error"]


class TestGetRepoTree:
    """Tests for the get_repo_tree tool."""

    @pytest.mark.asyncio
    async def test_returns_tree_and_counts(self, dispatcher):
        """Test derived file and directory counts."""
        result = await dispatcher.dispatch(ToolName.GET_REPO_TREE, {"path": "ignored"})

        assert result.success is True
        assert len(result.data["tree"]) == 3
        assert result.data["total_files"] == 2
        assert result.data["total_dirs"] == 1
        assert result.data["message"]
        assert result.data["tree"][0] == {
            "path": "README.md",
            "type": "file",
            "size": 120,
            "sha": "a1",
        }

    @pytest.mark.asyncio
    async def test_broadcasts_investigating(self, dispatcher, subscriber):
        """Test progress event before the host call."""
        await dispatcher.dispatch(ToolName.GET_REPO_TREE, {})

        events = _events(subscriber)
        assert events[0]["type"] == "investigating"
        assert events[0]["metadata"]["tool"] == "get_repo_tree"

    @pytest.mark.asyncio
    async def test_host_failure(self, broadcaster, subscriber, repository_host):
        """Test that host errors become failure envelopes and error events."""
        repository_host.get_full_tree = AsyncMock(
            side_effect=HostError("Failed to fetch full repository tree: 500 boom")
        )
        dispatcher = ToolDispatcher(broadcaster, repository_host)

        result = await dispatcher.dispatch(ToolName.GET_REPO_TREE, {})

        assert result.success is False
        assert "500 boom" in result.error
        assert result.data is None
        events = _events(subscriber)
        assert [e["type"] for e in events] == ["investigating", "error"]
        assert events[-1]["status"] == "Error loading repository structure"


class TestReadFileContent:
    """Tests for the read_file_content tool."""

    @pytest.mark.asyncio
    async def test_full_content(self, dispatcher):
        """Test reading without bounds returns the whole file."""
        result = await dispatcher.dispatch(
            ToolName.READ_FILE_CONTENT, {"file_path": "lib/cart.js"}
        )

        assert result.success is True
        assert result.data["path"] == "lib/cart.js"
        assert result.data["content"].split("\n") == [
            "line one",
            "line two",
            "line three",
            "line four",
            "line five",
        ]
        assert result.data["lineRange"] is None
        assert result.data["size"] > 0

    @pytest.mark.asyncio
    async def test_line_range(self, dispatcher):
        """Test slicing to lines 2-3 inclusive."""
        result = await dispatcher.dispatch(
            ToolName.READ_FILE_CONTENT,
            {"file_path": "lib/cart.js", "start_line": 2, "end_line": 3},
        )

        assert result.data["content"] == "line two\nline three"
        assert result.data["lineRange"] == {"start": 2, "end": 3}

    @pytest.mark.asyncio
    async def test_partial_bounds_not_applied(self, dispatcher):
        """Test that a single bound returns the full content."""
        result = await dispatcher.dispatch(
            ToolName.READ_FILE_CONTENT, {"file_path": "lib/cart.js", "start_line": 4}
        )

        assert result.data["content"].count("\n") == 4
        assert result.data["lineRange"] is None

    @pytest.mark.asyncio
    async def test_string_bounds_are_accepted(self, dispatcher):
        """Test numeric strings from the voice platform."""
        result = await dispatcher.dispatch(
            ToolName.READ_FILE_CONTENT,
            {"file_path": "lib/cart.js", "start_line": "5", "end_line": "9"},
        )

        assert result.data["content"] == "line five"

    @pytest.mark.asyncio
    async def test_reversed_bounds(self, dispatcher):
        """Test end_line before start_line is rejected."""
        result = await dispatcher.dispatch(
            ToolName.READ_FILE_CONTENT,
            {"file_path": "lib/cart.js", "start_line": 3, "end_line": 2},
        )

        assert result.success is False
        assert "end_line" in result.error

    @pytest.mark.asyncio
    async def test_missing_file_path(self, dispatcher):
        """Test required file_path."""
        result = await dispatcher.dispatch(ToolName.READ_FILE_CONTENT, {})

        assert result.success is False
        assert "file_path is required" in result.error

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(self, dispatcher):
        """Test NotAFile failure."""
        result = await dispatcher.dispatch(ToolName.READ_FILE_CONTENT, {"file_path": "lib"})

        assert result.success is False
        assert result.error == "lib is not a file"

    @pytest.mark.asyncio
    async def test_broadcast_names_file(self, dispatcher, subscriber):
        """Test that the progress event mentions the file name."""
        await dispatcher.dispatch(ToolName.READ_FILE_CONTENT, {"file_path": "lib/cart.js"})

        event = _events(subscriber)[0]
        assert event["status"] == "Reading cart.js..."
        assert event["metadata"]["file_path"] == "lib/cart.js"


class TestCreateGitHubIssue:
    """Tests for the create_github_issue tool."""

    @pytest.mark.asyncio
    async def test_missing_title(self, dispatcher, repository_host):
        """Test that context without a title fails."""
        result = await dispatcher.dispatch(
            ToolName.CREATE_GITHUB_ISSUE,
            {"file_path": "lib/cart.js", "code_snippet": "total -= discount", "body": "b"},
        )

        assert result.success is False
        assert "title is required" in result.error
        assert repository_host.created == []

    @pytest.mark.asyncio
    async def test_missing_title_and_body(self, dispatcher):
        """Test message for both missing fields."""
        result = await dispatcher.dispatch(ToolName.CREATE_GITHUB_ISSUE, {})

        assert result.error == "title and body are required for create_github_issue"

    @pytest.mark.asyncio
    async def test_labels_deduplicated(self, dispatcher, repository_host):
        """Test label merge with duplicates."""
        result = await dispatcher.dispatch(
            ToolName.CREATE_GITHUB_ISSUE,
            {
                "title": "Discount ignored",
                "body": "Total is wrong",
                "labels": ["bug", "customer-reported", "priority: medium", "bug"],
            },
        )

        assert result.success is True
        labels = result.data["labels"]
        assert labels.count("priority: medium") == 1
        assert labels.count("customer-reported") == 1
        assert labels.count("bug") == 1
        assert repository_host.created[0]["labels"] == labels

    @pytest.mark.asyncio
    async def test_default_labels_and_priority(self, dispatcher):
        """Test defaults."""
        result = await dispatcher.dispatch(
            ToolName.CREATE_GITHUB_ISSUE, {"title": "t", "body": "b", "priority": "high"}
        )

        assert result.data["labels"] == ["bug", "priority: high", "customer-reported"]

    @pytest.mark.asyncio
    async def test_body_with_code_context(self, dispatcher, repository_host):
        """Test the location section and footer."""
        result = await dispatcher.dispatch(
            ToolName.CREATE_GITHUB_ISSUE,
            {
                "title": "t",
                "body": "Total is wrong",
                "file_path": "lib/cart.js",
                "line_number": 42,
                "code_snippet": "total -= discount",
            },
        )

        assert result.success is True
        body = repository_host.created[0]["body"]
        assert body.startswith("Total is wrong\n\n---\n\n### Location\n\n")
        assert "**File:** `lib/cart.js`\n" in body
        assert "**Line:** 42\n" in body
        assert "```javascript\ntotal -= discount\n```" in body
        assert "**Reported by**: Voice Bug Agent" in body
        assert "**Timestamp**: " in body

    @pytest.mark.asyncio
    async def test_returns_issue_and_broadcasts(self, dispatcher, subscriber):
        """Test envelope data and resolving/resolved events."""
        result = await dispatcher.dispatch(
            ToolName.CREATE_GITHUB_ISSUE, {"title": "t", "body": "b"}
        )

        assert result.data["issue_number"] == 1
        assert result.data["issue_url"] == "https://github.com/acme/shop/issues/1"
        assert result.data["message"] == "Issue created successfully"

        events = _events(subscriber)
        assert [e["type"] for e in events] == ["resolving", "resolved"]
        assert events[1]["metadata"]["issue_number"] == 1


class TestDispatchRouting:
    """Tests for routing errors and webhook handling."""

    @pytest.mark.asyncio
    async def test_unknown_tool_raises(self, dispatcher):
        """Test that unknown names are not wrapped into an envelope."""
        with pytest.raises(UnknownToolError) as exc_info:
            await dispatcher.dispatch("delete_repo", {})

        assert "log_conversation" in exc_info.value.available_tools

    @pytest.mark.asyncio
    async def test_webhook_undeterminable(self, dispatcher):
        """Test empty payload."""
        with pytest.raises(UndeterminableToolError):
            await dispatcher.handle_webhook({})

    @pytest.mark.asyncio
    async def test_webhook_wrapped_payload(self, dispatcher):
        """Test the tool_name/parameters form."""
        result = await dispatcher.handle_webhook(
            {"tool_name": "log_conversation", "parameters": {"status": "hi"}}
        )

        assert result.data == {"status": "hi", "type": "info"}

    @pytest.mark.asyncio
    async def test_webhook_bare_parameters(self, dispatcher):
        """Test auto-detected bare parameters."""
        result = await dispatcher.handle_webhook({"file_path": "lib/cart.js"})

        assert result.success is True
        assert result.data["path"] == "lib/cart.js"

    @pytest.mark.asyncio
    async def test_mock_broadcaster_receives_error(self, mock_broadcaster, repository_host):
        """Test the error event payload through a mock broadcaster."""
        dispatcher = ToolDispatcher(mock_broadcaster, repository_host)

        await dispatcher.dispatch(ToolName.READ_FILE_CONTENT, {"file_path": "lib"})

        event = mock_broadcaster.broadcast.call_args_list[-1].args[0]
        assert event.type == "error"
        assert event.status == "Error reading file"
        assert event.metadata == {"tool": "read_file_content", "error": "lib is not a file"}


class TestParseRequest:
    """Tests for parse_request()."""

    def test_every_tool_has_a_request_type(self):
        assert set(REQUEST_TYPES) == set(ToolName)

    def test_builds_typed_request(self):
        request = parse_request(
            ToolName.READ_FILE_CONTENT,
            {"file_path": "lib/cart.js", "start_line": 2, "end_line": 3},
        )

        assert isinstance(request, ReadFileContentRequest)
        assert request.line_range == (2, 3)

    def test_missing_field_raises(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_request(ToolName.CREATE_GITHUB_ISSUE, {"title": "t"})

        assert exc_info.value.fields == ["body"]
