import uuid
from datetime import datetime

import pytest

from diary.domains.export.renderer import CorruptOutputError, EngineLaunchError, RenderTimeoutError


def test_single_export(client, alice, renderer, create_entry):
    entry = create_entry(alice, title="My/Trip:2024", content="<p>Beach day</p>", tags="travel", mood="😊")

    response = client.get(f"/entries/{entry['id']}/export", headers=alice)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="my_trip_2024.pdf"'
    assert int(response.headers["content-length"]) == len(response.content)
    assert "no-store" in response.headers["cache-control"]
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.content.startswith(b"%PDF")

    [document] = renderer.documents
    assert "My/Trip:2024" in document
    assert "<p>Beach day</p>" in document
    assert '<span class="entry-tag">travel</span>' in document


def test_single_export_sanitizes_content(client, alice, renderer, create_entry):
    entry = create_entry(alice, content='<p onclick="x()">Hi</p><script>alert(1)</script>')

    assert client.get(f"/entries/{entry['id']}/export", headers=alice).status_code == 200

    [document] = renderer.documents
    assert "<script" not in document
    assert "onclick" not in document
    assert "Hi" in document


def test_single_export_of_protected_entry(client, alice, renderer, create_entry):
    entry = create_entry(alice, title="Locked", passcode="1234")

    required = client.get(f"/entries/{entry['id']}/export", headers=alice)
    assert required.status_code == 403
    assert required.json()["requiresPasscode"] is True

    wrong = client.get(f"/entries/{entry['id']}/export", params={"passcode": "0000"}, headers=alice)
    assert wrong.status_code == 404
    assert renderer.documents == []

    granted = client.get(f"/entries/{entry['id']}/export", params={"passcode": "1234"}, headers=alice)
    assert granted.status_code == 200
    assert len(renderer.documents) == 1


def test_single_export_of_foreign_or_missing_entry(client, alice, bob, renderer, create_entry):
    entry = create_entry(alice)

    assert client.get(f"/entries/{entry['id']}/export", headers=bob).status_code == 404
    assert client.get(f"/entries/{uuid.uuid4()}/export", headers=alice).status_code == 404
    assert renderer.documents == []


def test_bulk_export_skips_unreadable_ids(client, alice, bob, renderer, create_entry):
    first = create_entry(alice, title="First")
    second = create_entry(alice, title="Second")
    foreign = create_entry(bob, title="Foreign")

    response = client.post(
        "/entries/export-bulk",
        json={"entryIds": [first["id"], second["id"], foreign["id"], "not-an-id", first["id"]]},
        headers=alice,
    )

    assert response.status_code == 200
    today = datetime.utcnow().strftime("%Y-%m-%d")
    assert response.headers["content-disposition"] == f'attachment; filename="diary_entries_{today}.pdf"'

    [document] = renderer.documents
    assert document.count('<section class="entry') == 2
    assert "<p>2 entries</p>" in document
    # One page per owned entry
    assert document.count('page-break">') + 1 == 2
    assert "Foreign" not in document
    assert document.index("Second") < document.index("First")


def test_bulk_export_honours_passcodes(client, alice, renderer, create_entry):
    open_entry = create_entry(alice, title="Open")
    locked = create_entry(alice, title="Locked", passcode="1234")
    ids = [open_entry["id"], locked["id"]]

    client.post("/entries/export-bulk", json={"entryIds": ids}, headers=alice)
    client.post(
        "/entries/export-bulk",
        json={"entryIds": ids, "passcodes": {locked["id"]: "1234"}},
        headers=alice,
    )

    without, with_passcode = renderer.documents
    assert "Locked" not in without
    assert "<p>1 entry</p>" in without
    assert "Locked" in with_passcode
    assert with_passcode.count('<section class="entry') == 2


def test_bulk_export_with_nothing_readable(client, alice, bob, renderer, create_entry):
    foreign = create_entry(bob)

    response = client.post(
        "/entries/export-bulk",
        json={"entryIds": [foreign["id"], str(uuid.uuid4()), "garbage"]},
        headers=alice,
    )

    assert response.status_code == 404
    assert response.json() == {"error": "No entries found"}
    assert renderer.documents == []


@pytest.mark.parametrize("payload", [{}, {"entryIds": []}, {"entryIds": "abc"}])
def test_bulk_export_validation(client, alice, payload):
    response = client.post("/entries/export-bulk", json=payload, headers=alice)
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_bulk_export_rejects_too_many_ids(client, alice):
    ids = [str(uuid.uuid4()) for _ in range(501)]
    response = client.post("/entries/export-bulk", json={"entryIds": ids}, headers=alice)
    assert response.status_code == 400


def test_export_requires_authentication(client):
    assert client.get(f"/entries/{uuid.uuid4()}/export").status_code == 401
    assert client.post("/entries/export-bulk", json={"entryIds": [str(uuid.uuid4())]}).status_code == 401


@pytest.mark.parametrize("error, status_code, code", [
    (RenderTimeoutError(), 500, "render_timeout"),
    (EngineLaunchError(), 500, "engine_launch_failed"),
    (CorruptOutputError(), 500, "corrupt_output"),
])
def test_render_failures_are_reported(client, alice, renderer, create_entry, error, status_code, code):
    entry = create_entry(alice)
    renderer.error = error

    response = client.get(f"/entries/{entry['id']}/export", headers=alice)

    assert response.status_code == status_code
    assert response.json() == {"error": error.message, "code": code}
    assert "content-disposition" not in response.headers
