"""Parsed representation of one line of a session log."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union


class MessageParseError(ValueError):
    """Raised when a session log line cannot be parsed."""


class _DecodeError(ValueError):
    pass


def _take(data: dict, key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise _DecodeError(f"field {key!r}: expected {kind.__name__}, got {value!r}")
    return value


_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})\Z"
)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _DecodeError(f"timestamp: expected string, got {value!r}")
    match = _RFC3339.match(value)
    if match is None:
        raise _DecodeError(f"timestamp: not RFC 3339: {value!r}")
    year, month, day, hour, minute, second = (int(match[i]) for i in range(1, 7))
    micros = int((match[7] or "")[:6].ljust(6, "0"))
    zone = match[8]
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    try:
        return datetime(year, month, day, hour, minute, second, micros, tzinfo=tz)
    except ValueError as exc:
        raise _DecodeError(f"timestamp: {exc}") from exc


@dataclass
class ContentBlock:
    """One block of an assistant message's content."""

    type: str = ""
    text: str = ""
    thinking: str = ""
    signature: str = ""
    id: str = ""
    name: str = ""
    input: Any = None

    def skill_name(self) -> str:
        """Skill name from a Skill tool_use block, or an empty string."""
        if self.name != "Skill" or not isinstance(self.input, dict):
            return ""
        skill = self.input.get("skill")
        return skill if isinstance(skill, str) else ""

    def file_tool_path(self) -> str:
        """File path from a file-related tool_use block's input, or an empty string."""
        if not isinstance(self.input, dict):
            return ""
        for key in ("file_path", "path", "glob_pattern", "target_directory"):
            if key not in self.input:
                continue
            value = self.input[key]
            if value is None:
                return ""
            if isinstance(value, str):
                return value
        return ""


@dataclass
class TokenUsage:
    """Token counts from an assistant message's usage field."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


def _decode_block(raw: Any) -> ContentBlock:
    if raw is None:
        return ContentBlock()
    if not isinstance(raw, dict):
        raise _DecodeError("content block: expected object")
    return ContentBlock(
        type=_take(raw, "type", str, ""),
        text=_take(raw, "text", str, ""),
        thinking=_take(raw, "thinking", str, ""),
        signature=_take(raw, "signature", str, ""),
        id=_take(raw, "id", str, ""),
        name=_take(raw, "name", str, ""),
        input=raw.get("input"),
    )


def _decode_usage(raw: Any) -> Optional[TokenUsage]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise _DecodeError("usage: expected object")
    return TokenUsage(
        input_tokens=_take(raw, "input_tokens", int, 0),
        output_tokens=_take(raw, "output_tokens", int, 0),
        cache_creation_input_tokens=_take(raw, "cache_creation_input_tokens", int, 0),
        cache_read_input_tokens=_take(raw, "cache_read_input_tokens", int, 0),
    )


@dataclass
class _AssistantInner:
    id: str = ""
    role: str = ""
    model: str = ""
    stop_reason: str = ""
    content: list[ContentBlock] = field(default_factory=list)
    usage: Optional[TokenUsage] = None


@dataclass
class _UserInner:
    role: str = ""
    content: Any = None


def _decode_assistant(raw: Any) -> _AssistantInner:
    if not isinstance(raw, dict):
        raise _DecodeError("assistant message: expected object")
    blocks = raw.get("content")
    if blocks is None:
        blocks = []
    elif not isinstance(blocks, list):
        raise _DecodeError("assistant content: expected array")
    return _AssistantInner(
        id=_take(raw, "id", str, ""),
        role=_take(raw, "role", str, ""),
        model=_take(raw, "model", str, ""),
        stop_reason=_take(raw, "stop_reason", str, ""),
        content=[_decode_block(block) for block in blocks],
        usage=_decode_usage(raw.get("usage")),
    )


def _decode_user(raw: Any) -> _UserInner:
    if not isinstance(raw, dict):
        raise _DecodeError("user message: expected object")
    return _UserInner(role=_take(raw, "role", str, ""), content=raw.get("content"))


@dataclass
class Message:
    """One parsed line of a session log."""

    type: str = ""
    uuid: str = ""
    timestamp: Optional[datetime] = None
    session_id: str = ""
    slug: str = ""
    cwd: str = ""
    git_branch: str = ""

    is_sidechain: bool = False
    is_meta: bool = False
    agent_id: str = ""
    entrypoint: str = ""

    # type=summary
    summary: str = ""
    leaf_uuid: str = ""

    # type=system
    subtype: str = ""
    duration_ms: int = 0

    # type=pr-link
    pr_number: int = 0
    pr_url: str = ""
    pr_repository: str = ""

    # Nested message body for user and assistant lines, decoded lazily.
    raw_message: Any = None

    _assistant: Optional[_AssistantInner] = field(
        default=None, init=False, repr=False, compare=False
    )
    _user: Optional[_UserInner] = field(
        default=None, init=False, repr=False, compare=False
    )

    def _assistant_inner(self) -> Optional[_AssistantInner]:
        if self._assistant is None and self.type == "assistant" and self.raw_message is not None:
            try:
                self._assistant = _decode_assistant(self.raw_message)
            except _DecodeError:
                pass
        return self._assistant

    def _user_inner(self) -> Optional[_UserInner]:
        if self._user is None and self.type == "user" and self.raw_message is not None:
            try:
                self._user = _decode_user(self.raw_message)
            except _DecodeError:
                pass
        return self._user

    def model(self) -> str:
        """Model name of an assistant message; empty for other types."""
        inner = self._assistant_inner()
        return inner.model if inner is not None else ""

    def usage(self) -> Optional[TokenUsage]:
        """Token usage of an assistant message; None for other types."""
        inner = self._assistant_inner()
        return inner.usage if inner is not None else None

    def assistant_content(self) -> list[ContentBlock]:
        """All content blocks of an assistant message."""
        inner = self._assistant_inner()
        return list(inner.content) if inner is not None else []

    def tool_use_blocks(self) -> list[ContentBlock]:
        """The tool_use content blocks of an assistant message."""
        return [block for block in self.assistant_content() if block.type == "tool_use"]

    def user_content(self) -> str:
        """Text of a user message; empty when the content is not a plain string."""
        inner = self._user_inner()
        if inner is None or not isinstance(inner.content, str):
            return ""
        return inner.content


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _message_from_dict(data: dict) -> Message:
    return Message(
        type=_take(data, "type", str, ""),
        uuid=_take(data, "uuid", str, ""),
        timestamp=_parse_timestamp(data.get("timestamp")),
        session_id=_take(data, "sessionId", str, ""),
        slug=_take(data, "slug", str, ""),
        cwd=_take(data, "cwd", str, ""),
        git_branch=_take(data, "gitBranch", str, ""),
        is_sidechain=_take(data, "isSidechain", bool, False),
        is_meta=_take(data, "isMeta", bool, False),
        agent_id=_take(data, "agentId", str, ""),
        entrypoint=_take(data, "entrypoint", str, ""),
        summary=_take(data, "summary", str, ""),
        leaf_uuid=_take(data, "leafUuid", str, ""),
        subtype=_take(data, "subtype", str, ""),
        duration_ms=_take(data, "durationMs", int, 0),
        pr_number=_take(data, "prNumber", int, 0),
        pr_url=_take(data, "prUrl", str, ""),
        pr_repository=_take(data, "prRepository", str, ""),
        raw_message=data.get("message"),
    )


def parse_message(line: Union[str, bytes, bytearray]) -> Message:
    """Parse one JSON line of a session log into a Message."""
    try:
        data = json.loads(line, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MessageParseError(f"parse message: {exc}") from exc
    if data is None:
        return Message()
    if not isinstance(data, dict):
        raise MessageParseError("parse message: expected a JSON object")
    try:
        return _message_from_dict(data)
    except _DecodeError as exc:
        raise MessageParseError(f"parse message: {exc}") from exc