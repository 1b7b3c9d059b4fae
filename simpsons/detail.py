"""Full session detail: timeline, file activity and chat history."""

from __future__ import annotations

from typing import Iterable, Optional

from simpsons.extract import FILE_TOOL_MAPPINGS
from simpsons.message import ContentBlock, Message
from simpsons.models import ChatMessage, FileOp, SessionDetail, SessionMeta, TimelineEvent

_CONTENT_LIMIT = 200


def truncate(s: str, max_len: int) -> str:
    """Shorten s to at most max_len bytes of UTF-8, ending with "..." when cut."""
    encoded = s.encode("utf-8")
    if len(encoded) <= max_len:
        return s
    if max_len <= 3:
        return encoded[:max_len].decode("utf-8", errors="ignore")
    return encoded[: max_len - 3].decode("utf-8", errors="ignore") + "..."


def tool_summary(block: ContentBlock) -> str:
    """One-line description of a tool_use block."""
    path = block.file_tool_path()
    if path:
        return f"{block.name} → {path}"
    return block.name


def extract_session_detail(
    messages: Optional[Iterable[Message]], meta: SessionMeta
) -> SessionDetail:
    """Build the timeline, file activity and chat history of a session."""
    detail = SessionDetail(meta=meta)

    for msg in messages or ():
        if msg.is_sidechain:
            continue

        if msg.type == "user":
            text = msg.user_content()
            detail.timeline.append(
                TimelineEvent(
                    timestamp=msg.timestamp,
                    type="user",
                    content=truncate(text, _CONTENT_LIMIT),
                )
            )
            detail.chat_messages.append(
                ChatMessage(role="user", content=text, timestamp=msg.timestamp)
            )

        elif msg.type == "assistant":
            for block in msg.assistant_content():
                if block.type == "text":
                    if block.text:
                        detail.chat_messages.append(
                            ChatMessage(
                                role="assistant",
                                content=block.text,
                                timestamp=msg.timestamp,
                            )
                        )
                elif block.type == "tool_use":
                    path = block.file_tool_path()
                    detail.timeline.append(
                        TimelineEvent(
                            timestamp=msg.timestamp,
                            type="tool_use",
                            tool_name=block.name,
                            content=truncate(path, _CONTENT_LIMIT),
                        )
                    )
                    op_type = FILE_TOOL_MAPPINGS.get(block.name)
                    if op_type is not None:
                        detail.file_activity.append(
                            FileOp(
                                timestamp=msg.timestamp,
                                path=path,
                                operation=op_type,
                                actor=meta.uuid,
                                actor_type="session",
                                tool_name=block.name,
                            )
                        )
                    detail.chat_messages.append(
                        ChatMessage(
                            role="tool",
                            content=tool_summary(block),
                            timestamp=msg.timestamp,
                            tool_name=block.name,
                        )
                    )

    return detail