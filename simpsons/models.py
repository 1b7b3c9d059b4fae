"""Core data records describing sessions, subagents, timelines and chats."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional


@dataclass
class SessionMeta:
    """Lightweight session metadata gathered during the background scan."""

    uuid: str = ""
    slug: str = ""
    project_path: str = ""
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: timedelta = field(default_factory=timedelta)
    initial_prompt: str = ""
    session_titles: list[str] = field(default_factory=list)
    models: dict[str, int] = field(default_factory=dict)
    tokens_in: int = 0
    tokens_out: int = 0
    cache_read: int = 0
    cache_write: int = 0
    tool_usage: dict[str, int] = field(default_factory=dict)
    skills_used: dict[str, int] = field(default_factory=dict)
    commands_used: dict[str, int] = field(default_factory=dict)
    git_branches: list[str] = field(default_factory=list)
    subagent_count: int = 0
    file_ops: dict[str, int] = field(default_factory=dict)
    message_count: int = 0
    cost_usd: float = 0.0
    entrypoint: str = ""
    linked_pr_count: int = 0
    pr_links: list[str] = field(default_factory=list)
    turn_count: int = 0
    total_turn_ms: int = 0


@dataclass
class TimelineEvent:
    """A single event in a session timeline."""

    timestamp: Optional[datetime] = None
    type: str = ""
    content: str = ""
    tool_name: str = ""
    actor_id: str = ""


@dataclass
class FileOp:
    """A file operation performed during a session."""

    timestamp: Optional[datetime] = None
    path: str = ""
    operation: str = ""
    actor: str = ""
    actor_type: str = ""
    tool_name: str = ""


@dataclass
class ChatMessage:
    """A single message in a session's chat history."""

    role: str = ""
    content: str = ""
    timestamp: Optional[datetime] = None
    tool_name: str = ""


@dataclass
class SubagentMeta:
    """Metadata about a subagent invocation."""

    agent_id: str = ""
    type: str = ""
    initial_prompt: str = ""
    tool_usage: dict[str, int] = field(default_factory=dict)
    tokens_in: int = 0
    tokens_out: int = 0
    duration: timedelta = field(default_factory=timedelta)


@dataclass
class SessionDetail:
    """Full session data, loaded lazily when a session is opened."""

    meta: Optional[SessionMeta] = None
    timeline: list[TimelineEvent] = field(default_factory=list)
    file_activity: list[FileOp] = field(default_factory=list)
    subagents: list[SubagentMeta] = field(default_factory=list)
    chat_messages: list[ChatMessage] = field(default_factory=list)