import uuid

import pytest

from diary.domains.entries.entities import AccessDecision, Entry, EntryAccess

OWNER = uuid.uuid4()
STRANGER = uuid.uuid4()


@pytest.fixture(scope="module")
def protected_entry():
    return Entry.create_entry(OWNER, "Locked", "<p>secret</p>", passcode="open-sesame")


def test_open_entry_granted_to_owner():
    entry = Entry.create_entry(OWNER, "Open", "<p>hello</p>")
    assert EntryAccess(entry).decide(OWNER) is AccessDecision.GRANTED
    assert EntryAccess(entry).decide(OWNER, "anything") is AccessDecision.GRANTED


def test_open_entry_hidden_from_other_users():
    entry = Entry.create_entry(OWNER, "Open", "<p>hello</p>")
    assert EntryAccess(entry).decide(STRANGER) is AccessDecision.NOT_FOUND


def test_missing_entry_is_not_found():
    assert EntryAccess(None).decide(OWNER) is AccessDecision.NOT_FOUND


def test_protected_entry_requires_passcode(protected_entry):
    assert EntryAccess(protected_entry).decide(OWNER) is AccessDecision.PASSCODE_REQUIRED
    assert EntryAccess(protected_entry).decide(OWNER, "") is AccessDecision.PASSCODE_REQUIRED


def test_protected_entry_exact_passcode(protected_entry):
    assert EntryAccess(protected_entry).decide(OWNER, "open-sesame") is AccessDecision.GRANTED


@pytest.mark.parametrize("attempt", ["open-sesam", "OPEN-SESAME", "open-sesame ", "x"])
def test_protected_entry_wrong_passcode(protected_entry, attempt):
    assert EntryAccess(protected_entry).decide(OWNER, attempt) is AccessDecision.FORBIDDEN


def test_stranger_never_reaches_passcode_check(protected_entry):
    assert EntryAccess(protected_entry).decide(STRANGER, "open-sesame") is AccessDecision.NOT_FOUND


def test_passcode_is_stored_hashed(protected_entry):
    assert protected_entry.passcode_hash
    assert "open-sesame" not in protected_entry.passcode_hash


def test_new_entry_timestamps_match():
    entry = Entry.create_entry(OWNER, "T", "<p>C</p>")
    assert entry.created_at == entry.updated_at


def test_apply_changes_bumps_updated_at():
    entry = Entry.create_entry(OWNER, "T", "<p>C</p>", tags="a,b", mood="🙂")
    entry.apply_changes(title="New", clear_tags=True)
    assert entry.title == "New"
    assert entry.tags is None
    assert entry.mood == "🙂"
    assert entry.updated_at >= entry.created_at


def test_long_passcode_compared_in_full():
    passcode = "a" * 72 + "SECRET-TAIL"
    entry = Entry.create_entry(OWNER, "Long", "<p>secret</p>", passcode=passcode)

    assert EntryAccess(entry).decide(OWNER, passcode) is AccessDecision.GRANTED
    assert EntryAccess(entry).decide(OWNER, "a" * 72 + "wrong") is AccessDecision.FORBIDDEN
    assert EntryAccess(entry).decide(OWNER, "a" * 72) is AccessDecision.FORBIDDEN
