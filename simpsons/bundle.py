"""Reading exported bundles and placing imported sessions on disk."""

from __future__ import annotations

import os
import zipfile
from typing import Union

from simpsons.manifest import Manifest, ManifestError, TransferError

PathLike = Union[str, os.PathLike]


def _home_dir() -> str:
    home = os.path.expanduser("~")
    if home == "~":
        raise OSError("home directory is not known")
    return home


def expand_path(path: str) -> str:
    """Expand a leading ~ to the user's home directory."""
    if path == "~":
        try:
            return _home_dir()
        except OSError:
            return path
    if path.startswith("~/"):
        try:
            home = _home_dir()
        except OSError:
            return path
        return os.path.normpath(os.path.join(home, path[2:]))
    return path


def read_bundle(zip_path: PathLike) -> tuple[Manifest, dict[str, bytes]]:
    """Read a bundle; return its manifest and its other files keyed by zip path."""
    zip_path = expand_path(os.fspath(zip_path))
    manifest = None
    files: dict[str, bytes] = {}

    try:
        archive = zipfile.ZipFile(zip_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise TransferError(f"opening zip bundle: {exc}") from exc

    with archive:
        for info in archive.infolist():
            try:
                data = archive.read(info)
            except (OSError, zipfile.BadZipFile, RuntimeError) as exc:
                raise TransferError(f"reading zip entry {info.filename!r}: {exc}") from exc
            if info.filename == "manifest.json":
                parsed = Manifest.from_json(data)
                try:
                    parsed.validate()
                except ManifestError as exc:
                    raise ManifestError(f"invalid manifest: {exc}") from exc
                manifest = parsed
            else:
                files[info.filename] = data

    if manifest is None:
        raise TransferError("bundle missing manifest.json")
    return manifest, files


def place_session(claude_dir: PathLike, project_path: str, uuid: str, data: bytes) -> None:
    """Write a session log to its place under the given directory."""
    directory = os.path.join(os.fspath(claude_dir), "projects", project_path)
    try:
        os.makedirs(directory, mode=0o755, exist_ok=True)
    except OSError as exc:
        raise TransferError(f"creating project directory: {exc}") from exc
    try:
        with open(os.path.join(directory, uuid + ".jsonl"), "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise TransferError(f"writing session file: {exc}") from exc