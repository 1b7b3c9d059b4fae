from datetime import datetime, timedelta

from simpsons.models import (
    ChatMessage,
    FileOp,
    SessionDetail,
    SessionMeta,
    SubagentMeta,
    TimelineEvent,
)


def test_session_meta_duration():
    now = datetime.now()
    meta = SessionMeta(
        uuid="test-uuid",
        slug="test-slug",
        start_time=now - timedelta(minutes=10),
        end_time=now,
    )
    assert meta.uuid == "test-uuid"
    assert meta.slug == "test-slug"
    assert meta.end_time - meta.start_time == timedelta(minutes=10)


def test_session_meta_defaults():
    meta = SessionMeta()
    assert meta.tool_usage == {}
    assert meta.message_count == 0
    assert meta.start_time is None
    assert meta.duration == timedelta(0)


def test_session_meta_defaults_are_independent():
    first = SessionMeta()
    second = SessionMeta()
    first.tool_usage["Read"] = 3
    first.git_branches.append("main")
    assert second.tool_usage == {}
    assert second.git_branches == []


def test_chat_message_defaults():
    msg = ChatMessage(role="user", content="Fix the login bug", timestamp=datetime.now())
    assert msg.role == "user"
    assert msg.content == "Fix the login bug"
    assert msg.tool_name == ""


def test_chat_message_tool_call():
    msg = ChatMessage(
        role="tool",
        content="Read → /work/login.go",
        timestamp=datetime.now(),
        tool_name="Read",
    )
    assert msg.role == "tool"
    assert msg.tool_name == "Read"


def test_session_detail_holds_meta_and_collections():
    meta = SessionMeta(uuid="s1")
    detail = SessionDetail(meta=meta)
    detail.timeline.append(TimelineEvent(type="user", content="hi"))
    detail.file_activity.append(FileOp(path="/work/a.go", operation="read"))
    detail.subagents.append(SubagentMeta(agent_id="agent-1", type="Explore"))
    assert detail.meta is meta
    assert [e.content for e in detail.timeline] == ["hi"]
    assert detail.file_activity[0].operation == "read"
    assert detail.subagents[0].duration == timedelta(0)
    assert SessionDetail().timeline == []