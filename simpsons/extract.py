"""Lightweight session metadata extracted from parsed log messages."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Iterable, Optional

from simpsons.cost import compute_cost
from simpsons.message import Message
from simpsons.models import SessionMeta

# File tool name -> operation category.
FILE_TOOL_MAPPINGS: dict[str, str] = {
    "Read": "read",
    "Write": "write",
    "Edit": "edit",
    "StrReplace": "edit",
    "Delete": "delete",
    "Glob": "search",
    "LS": "read",
    "Grep": "search",
    "SemanticSearch": "search",
}

_JSONL_SUFFIX = ".jsonl"


def _bump(counts: dict[str, int], key: str, amount: int = 1) -> None:
    counts[key] = counts.get(key, 0) + amount


def extract_session_meta(
    messages: Optional[Iterable[Message]],
    project_path: str,
    filename: str,
) -> SessionMeta:
    """Build session metadata from the messages of one session log."""
    meta = SessionMeta(
        project_path=project_path,
        uuid=os.path.basename(filename).removesuffix(_JSONL_SUFFIX),
    )

    branches: dict[str, None] = {}
    first_user_content = ""
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None

    for msg in messages or ():
        if msg.timestamp is not None:
            if first_timestamp is None:
                first_timestamp = msg.timestamp
            last_timestamp = msg.timestamp

        if not meta.slug and msg.slug:
            meta.slug = msg.slug

        if msg.git_branch and msg.git_branch != "HEAD":
            branches[msg.git_branch] = None

        if not meta.entrypoint and msg.entrypoint:
            meta.entrypoint = msg.entrypoint

        if msg.type == "summary":
            if msg.summary:
                meta.session_titles.append(msg.summary)

        elif msg.type == "user":
            if not msg.is_sidechain:
                meta.message_count += 1
                if not first_user_content:
                    first_user_content = msg.user_content()

        elif msg.type == "pr-link":
            if msg.pr_url:
                meta.pr_links.append(msg.pr_url)
                meta.linked_pr_count += 1

        elif msg.type == "system":
            if msg.subtype == "turn_duration" and msg.duration_ms > 0:
                meta.turn_count += 1
                meta.total_turn_ms += msg.duration_ms

        elif msg.type == "assistant":
            if msg.is_sidechain:
                continue
            meta.message_count += 1
            model_name = msg.model()
            if model_name:
                _bump(meta.models, model_name)

            usage = msg.usage()
            if usage is not None:
                meta.tokens_in += usage.input_tokens
                meta.tokens_out += usage.output_tokens
                meta.cache_read += usage.cache_read_input_tokens
                meta.cache_write += usage.cache_creation_input_tokens
                meta.cost_usd += compute_cost(
                    model_name,
                    usage.input_tokens,
                    usage.output_tokens,
                    usage.cache_creation_input_tokens,
                    usage.cache_read_input_tokens,
                )

            for tool in msg.tool_use_blocks():
                _bump(meta.tool_usage, tool.name)
                if tool.name == "Skill":
                    skill = tool.skill_name()
                    if skill:
                        _bump(meta.skills_used, skill)
                op_type = FILE_TOOL_MAPPINGS.get(tool.name)
                if op_type is not None:
                    _bump(meta.file_ops, op_type)

    meta.initial_prompt = first_user_content
    meta.start_time = first_timestamp
    meta.end_time = last_timestamp
    if first_timestamp is not None and last_timestamp is not None:
        meta.duration = last_timestamp - first_timestamp

    meta.git_branches = list(branches)
    return meta