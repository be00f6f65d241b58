import uuid
from datetime import datetime

from diary.domains.export.services import bulk_filename, entry_filename, parse_entry_ids


def test_entry_filename():
    assert entry_filename("My/Trip:2024") == "my_trip_2024.pdf"
    assert entry_filename("Hello World") == "hello_world.pdf"
    assert entry_filename("Été") == "_t_.pdf"
    assert entry_filename("") == "entry.pdf"


def test_bulk_filename():
    assert bulk_filename(datetime(2024, 5, 16, 23, 59)) == "diary_entries_2024-05-16.pdf"


def test_parse_entry_ids_keeps_first_seen_order():
    first, second = uuid.uuid4(), uuid.uuid4()
    raw = [str(second), "nope", str(first), str(second).upper(), "", str(first)]

    assert parse_entry_ids(raw) == [second, first]


def test_parse_entry_ids_without_valid_ids():
    assert parse_entry_ids(["1", "abc"]) == []
    assert parse_entry_ids([]) == []
