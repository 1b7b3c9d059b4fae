import json
from datetime import datetime, timezone

import pytest

from simpsons.message import ContentBlock, MessageParseError, parse_message


def _encode(record):
    return json.dumps(record).encode("utf-8")


def _user_record():
    return {
        "type": "user",
        "uuid": "abc-123",
        "timestamp": "2026-03-03T10:00:00.000Z",
        "sessionId": "sess-1",
        "slug": "cool-slug",
        "cwd": "/Users/r/work",
        "gitBranch": "main",
        "isSidechain": False,
        "message": {"role": "user", "content": "Hello world"},
    }


def _assistant_record():
    return {
        "type": "assistant",
        "uuid": "def-456",
        "timestamp": "2026-03-03T10:01:00.000Z",
        "sessionId": "sess-1",
        "slug": "cool-slug",
        "gitBranch": "main",
        "isSidechain": False,
        "message": {
            "id": "msg_xxx",
            "role": "assistant",
            "model": "claude-opus-4-6",
            "stop_reason": "end_turn",
            "content": [
                {"type": "text", "text": "Hi there!"},
                {
                    "type": "tool_use",
                    "id": "toolu_01",
                    "name": "Read",
                    "input": {"file_path": "/tmp/foo.txt"},
                },
            ],
            "usage": {
                "input_tokens": 100,
                "output_tokens": 50,
                "cache_creation_input_tokens": 200,
                "cache_read_input_tokens": 5000,
            },
        },
    }


def test_user_message_fields():
    msg = parse_message(_encode(_user_record()))
    assert msg.type == "user"
    assert msg.uuid == "abc-123"
    assert msg.slug == "cool-slug"
    assert msg.git_branch == "main"
    assert msg.cwd == "/Users/r/work"
    assert msg.session_id == "sess-1"
    assert msg.user_content() == "Hello world"


def test_timestamp_is_parsed_as_utc():
    msg = parse_message(_encode(_user_record()))
    assert msg.timestamp == datetime(2026, 3, 3, 10, 0, 0, tzinfo=timezone.utc)


def test_timestamp_with_offset_and_nanoseconds():
    record = {"type": "x", "timestamp": "2026-03-03T12:00:00.123456789+02:00"}
    msg = parse_message(json.dumps(record))
    assert msg.timestamp == datetime(2026, 3, 3, 10, 0, 0, 123456, tzinfo=timezone.utc)


def test_assistant_message_model_usage_and_tools():
    msg = parse_message(_encode(_assistant_record()))
    assert msg.type == "assistant"
    assert msg.model() == "claude-opus-4-6"

    usage = msg.usage()
    assert usage is not None
    assert (
        usage.input_tokens,
        usage.output_tokens,
        usage.cache_creation_input_tokens,
        usage.cache_read_input_tokens,
    ) == (100, 50, 200, 5000)

    tools = msg.tool_use_blocks()
    assert [t.name for t in tools] == ["Read"]
    assert tools[0].file_tool_path() == "/tmp/foo.txt"
    assert [b.type for b in msg.assistant_content()] == ["text", "tool_use"]


def test_summary_message():
    record = {"type": "summary", "summary": "Fix the login bug", "leafUuid": "leaf-1"}
    msg = parse_message(_encode(record))
    assert msg.type == "summary"
    assert msg.summary == "Fix the login bug"
    assert msg.leaf_uuid == "leaf-1"


def test_skill_detection():
    record = _assistant_record()
    record["uuid"] = "skill-1"
    record["message"]["content"] = [
        {
            "type": "tool_use",
            "id": "toolu_02",
            "name": "Skill",
            "input": {"skill": "superpowers:brainstorming"},
        }
    ]
    tools = parse_message(_encode(record)).tool_use_blocks()
    assert len(tools) == 1
    assert tools[0].name == "Skill"
    assert tools[0].skill_name() == "superpowers:brainstorming"


def test_invalid_json():
    with pytest.raises(MessageParseError):
        parse_message(b"not valid json")


def test_non_object_json():
    with pytest.raises(MessageParseError):
        parse_message(_encode([1, 2, 3]))


def test_wrong_field_type():
    with pytest.raises(MessageParseError):
        parse_message(_encode({"type": 5}))


def test_bad_timestamp():
    with pytest.raises(MessageParseError):
        parse_message(_encode({"type": "user", "timestamp": "yesterday"}))


def test_unknown_type_is_kept():
    msg = parse_message(_encode({"type": "progress", "uuid": "x"}))
    assert msg.type == "progress"


def test_system_and_pr_fields():
    record = {
        "type": "system",
        "subtype": "turn_duration",
        "durationMs": 5000,
        "prNumber": 12,
        "prUrl": "https://example.com/pr/12",
        "prRepository": "foo/bar",
    }
    msg = parse_message(_encode(record))
    assert msg.subtype == "turn_duration"
    assert msg.duration_ms == 5000
    assert msg.pr_number == 12
    assert msg.pr_url == "https://example.com/pr/12"
    assert msg.pr_repository == "foo/bar"


def test_user_content_array_is_empty():
    record = {
        "type": "user",
        "message": {"role": "user", "content": [{"type": "text", "text": "hi"}]},
    }
    assert parse_message(_encode(record)).user_content() == ""


def test_assistant_accessors_on_user_message_are_empty():
    msg = parse_message(_encode(_user_record()))
    assert msg.model() == ""
    assert msg.usage() is None
    assert msg.tool_use_blocks() == []


def test_malformed_assistant_body_yields_nothing():
    record = {"type": "assistant", "message": {"model": "m", "content": "oops"}}
    msg = parse_message(_encode(record))
    assert msg.model() == ""
    assert msg.assistant_content() == []


def test_skill_name_only_for_skill_blocks():
    assert ContentBlock(name="Read", input={"skill": "x"}).skill_name() == ""
    assert ContentBlock(name="Skill").skill_name() == ""
    assert ContentBlock(name="Skill", input={"skill": 3}).skill_name() == ""


def test_file_tool_path_key_order():
    assert ContentBlock(name="Grep", input={"pattern": "x", "path": "/src"}).file_tool_path() == "/src"
    assert ContentBlock(input={"path": "/b", "file_path": "/a"}).file_tool_path() == "/a"
    assert ContentBlock(input={"file_path": 5, "path": "/p"}).file_tool_path() == "/p"
    assert ContentBlock(input={"glob_pattern": "*.py"}).file_tool_path() == "*.py"
    assert ContentBlock(input={"command": "make"}).file_tool_path() == ""
    assert ContentBlock().file_tool_path() == ""