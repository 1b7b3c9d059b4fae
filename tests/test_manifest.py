import json
from datetime import datetime, timezone

import pytest

from simpsons.manifest import (
    BulkSessionEntry,
    Manifest,
    ManifestError,
    TransferError,
)

TS = datetime(2026, 3, 5, 12, 0, 0, tzinfo=timezone.utc)


def test_round_trip_single():
    m = Manifest(
        version=1,
        type="single",
        exported_at=TS,
        project_path="/home/user/project",
        session_uuid="abc-123",
        slug="my-session",
    )
    got = Manifest.from_json(m.to_json())
    assert got.version == 1
    assert got.type == "single"
    assert got.exported_at == TS
    assert got.project_path == "/home/user/project"
    assert got.session_uuid == "abc-123"
    assert got.slug == "my-session"


def test_round_trip_bulk():
    m = Manifest(
        version=1,
        type="bulk",
        exported_at=TS,
        sessions=[
            BulkSessionEntry(project_path="/home/user/p1", session_uuid="uuid-1", slug="slug-1"),
            BulkSessionEntry(project_path="/home/user/p2", session_uuid="uuid-2"),
        ],
    )
    got = Manifest.from_json(m.to_json())
    assert len(got.sessions) == 2
    assert got.sessions[0].session_uuid == "uuid-1"
    assert got.sessions[1].slug == ""


def test_to_dict_omits_empty_fields():
    m = Manifest(
        type="bulk",
        exported_at=TS,
        sessions=[BulkSessionEntry(project_path="/p", session_uuid="u")],
    )
    assert m.to_dict() == {
        "version": 1,
        "type": "bulk",
        "exported_at": "2026-03-05T12:00:00Z",
        "sessions": [{"project_path": "/p", "session_uuid": "u"}],
    }


def test_time_with_fraction_and_offset():
    data = json.loads(
        Manifest(type="single", exported_at=datetime(2026, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc)).to_json()
    )
    assert data["exported_at"] == "2026-01-02T03:04:05.5Z"
    parsed = Manifest.from_dict({"version": 1, "exported_at": "2026-01-02T03:04:05.123456789+02:00"})
    assert parsed.exported_at == datetime(2026, 1, 2, 1, 4, 5, 123456, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "manifest",
    [
        Manifest(version=1, type="single", project_path="/project", session_uuid="uuid-1"),
        Manifest(version=1, type="bulk", sessions=[BulkSessionEntry(project_path="/p", session_uuid="u")]),
    ],
)
def test_validate_ok(manifest):
    assert manifest.validate() is None


@pytest.mark.parametrize(
    "manifest",
    [
        Manifest(version=2, type="single", project_path="/project", session_uuid="uuid-1"),
        Manifest(version=1, type="multi", project_path="/project", session_uuid="uuid-1"),
        Manifest(version=1, type="single", project_path="/project"),
        Manifest(version=1, type="single", session_uuid="uuid-1"),
        Manifest(version=1, type="bulk"),
    ],
)
def test_validate_errors(manifest):
    with pytest.raises(ManifestError):
        manifest.validate()


def test_from_json_rejects_bad_input():
    with pytest.raises(ManifestError):
        Manifest.from_json("not json")
    with pytest.raises(ManifestError):
        Manifest.from_json('{"version": "one"}')
    with pytest.raises(ManifestError):
        Manifest.from_json('{"version": 1, "exported_at": "yesterday"}')


def test_manifest_error_is_transfer_error():
    with pytest.raises(TransferError):
        Manifest(version=3, type="bulk").validate()