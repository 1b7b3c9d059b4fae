"""Exporting sessions as zip bundles."""

from __future__ import annotations

import os
import zipfile
from datetime import datetime
from typing import Iterable, Union

from simpsons.manifest import BulkSessionEntry, Manifest, TransferError
from simpsons.models import SessionMeta

_STAMP_FORMAT = "%Y-%m-%dT%H%M"

PathLike = Union[str, os.PathLike]


def _session_path(claude_dir: PathLike, meta: SessionMeta) -> str:
    return os.path.join(os.fspath(claude_dir), "projects", meta.project_path, meta.uuid + ".jsonl")


def _write_zip(zip_path: str, manifest: Manifest, files: dict[str, bytes]) -> None:
    try:
        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("manifest.json", manifest.to_json())
            for name, data in files.items():
                archive.writestr(name, data)
    except OSError as exc:
        raise TransferError(f"creating zip file: {exc}") from exc


def export_session(claude_dir: PathLike, meta: SessionMeta, output_dir: PathLike) -> str:
    """Export one session as a zip bundle; return the bundle's file name."""
    try:
        with open(_session_path(claude_dir, meta), "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise TransferError(f"reading session JSONL: {exc}") from exc

    now = datetime.now().astimezone()
    manifest = Manifest(
        type="single",
        exported_at=now,
        project_path=meta.project_path,
        session_uuid=meta.uuid,
        slug=meta.slug,
    )
    short_id = meta.uuid[:8]
    slug = meta.slug or short_id
    filename = f"{now.strftime(_STAMP_FORMAT)}-{slug}-{short_id}.zip"
    _write_zip(os.path.join(os.fspath(output_dir), filename), manifest, {meta.uuid + ".jsonl": data})
    return filename


def export_all(
    claude_dir: PathLike, metas: Iterable[SessionMeta], output_dir: PathLike
) -> str:
    """Export many sessions into one zip bundle, skipping unreadable ones.

    Raises TransferError if no session could be read.
    """
    files: dict[str, bytes] = {}
    entries: list[BulkSessionEntry] = []

    for meta in metas:
        try:
            with open(_session_path(claude_dir, meta), "rb") as handle:
                data = handle.read()
        except OSError:
            continue
        files[f"{meta.project_path}/{meta.uuid}.jsonl"] = data
        entries.append(
            BulkSessionEntry(project_path=meta.project_path, session_uuid=meta.uuid, slug=meta.slug)
        )

    if not entries:
        raise TransferError("no sessions could be read")

    now = datetime.now().astimezone()
    manifest = Manifest(type="bulk", exported_at=now, sessions=entries)
    filename = f"simpsons-export-{now.strftime(_STAMP_FORMAT)}.zip"
    _write_zip(os.path.join(os.fspath(output_dir), filename), manifest, files)
    return filename