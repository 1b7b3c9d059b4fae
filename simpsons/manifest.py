"""Manifest describing the contents of an exported session bundle."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

MANIFEST_VERSION = 1

_ZERO_TIME = "0001-01-01T00:00:00Z"
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})\Z"
)


class TransferError(Exception):
    """Raised when a session bundle cannot be exported or imported."""


class ManifestError(TransferError):
    """Raised when a manifest is malformed or invalid."""


def _format_time(moment: Optional[datetime]) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta()
    if offset == timedelta():
        return text + "Z"
    sign = "-" if offset < timedelta() else "+"
    minutes = int(abs(offset).total_seconds()) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ManifestError(f"exported_at: expected string, got {value!r}")
    match = _RFC3339.match(value)
    if match is None:
        raise ManifestError(f"exported_at: not RFC 3339: {value!r}")
    year, month, day, hour, minute, second = (int(match[i]) for i in range(1, 7))
    micros = int((match[7] or "")[:6].ljust(6, "0"))
    zone = match[8]
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    try:
        moment = datetime(year, month, day, hour, minute, second, micros, tzinfo=tz)
    except ValueError as exc:
        raise ManifestError(f"exported_at: {exc}") from exc
    if moment == datetime(1, 1, 1, tzinfo=timezone.utc):
        return None
    return moment


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ManifestError(f"field {key!r}: expected string, got {value!r}")
    return value


@dataclass
class BulkSessionEntry:
    """One session inside a bulk export."""

    project_path: str = ""
    session_uuid: str = ""
    slug: str = ""

    def to_dict(self) -> dict[str, str]:
        """JSON-ready form of the entry."""
        data = {"project_path": self.project_path, "session_uuid": self.session_uuid}
        if self.slug:
            data["slug"] = self.slug
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "BulkSessionEntry":
        """Build an entry from its decoded JSON form."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ManifestError("session entry: expected object")
        return cls(
            project_path=_string(data, "project_path"),
            session_uuid=_string(data, "session_uuid"),
            slug=_string(data, "slug"),
        )


@dataclass
class Manifest:
    """Describes the contents of an exported session bundle."""

    version: int = MANIFEST_VERSION
    type: str = ""
    exported_at: Optional[datetime] = None
    project_path: str = ""
    session_uuid: str = ""
    slug: str = ""
    sessions: list[BulkSessionEntry] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ManifestError unless the manifest is well-formed."""
        if self.version != MANIFEST_VERSION:
            raise ManifestError(f"unsupported manifest version: {self.version}")
        if self.type == "single":
            if not self.session_uuid:
                raise ManifestError("single export requires session_uuid")
            if not self.project_path:
                raise ManifestError("single export requires project_path")
        elif self.type == "bulk":
            if not self.sessions:
                raise ManifestError("bulk export requires at least one session entry")
        else:
            raise ManifestError(f"unsupported manifest type: {self.type!r}")

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form of the manifest; empty optional fields are left out."""
        data: dict[str, Any] = {
            "version": self.version,
            "type": self.type,
            "exported_at": _format_time(self.exported_at),
        }
        if self.project_path:
            data["project_path"] = self.project_path
        if self.session_uuid:
            data["session_uuid"] = self.session_uuid
        if self.slug:
            data["slug"] = self.slug
        if self.sessions:
            data["sessions"] = [entry.to_dict() for entry in self.sessions]
        return data

    def to_json(self) -> str:
        """Indented JSON text of the manifest."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        """Build a manifest from its decoded JSON form."""
        if data is None:
            return cls(version=0)
        if not isinstance(data, dict):
            raise ManifestError("manifest: expected object")
        version = data.get("version")
        if version is None:
            version = 0
        elif not isinstance(version, int) or isinstance(version, bool):
            raise ManifestError(f"field 'version': expected integer, got {version!r}")
        sessions = data.get("sessions")
        if sessions is None:
            sessions = []
        elif not isinstance(sessions, list):
            raise ManifestError("field 'sessions': expected array")
        return cls(
            version=version,
            type=_string(data, "type"),
            exported_at=_parse_time(data.get("exported_at")),
            project_path=_string(data, "project_path"),
            session_uuid=_string(data, "session_uuid"),
            slug=_string(data, "slug"),
            sessions=[BulkSessionEntry.from_dict(entry) for entry in sessions],
        )

    @classmethod
    def from_json(cls, text: Any) -> "Manifest":
        """Parse a manifest from JSON text."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ManifestError(f"parsing manifest: {exc}") from exc
        return cls.from_dict(data)