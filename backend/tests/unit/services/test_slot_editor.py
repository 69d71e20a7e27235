from __future__ import annotations

from datetime import date

import pytest

from doctor_slots.core.exceptions import (
    CapacityExceededException,
    InvalidRecordException,
    SessionNotStartedException,
)
from doctor_slots.domain.slot_set import SlotSet
from doctor_slots.services.slot_editor import EditorState, SlotEditor

from tests._utils import RecordingListener


def test_new_editor_is_uninitialized():
    session = SlotEditor("doc-1")
    assert session.state is EditorState.UNINITIALIZED
    assert session.current.is_empty()
    assert session.baseline is None
    assert session.dirty is False


def test_mutation_before_seed_is_rejected():
    session = SlotEditor("doc-1")
    with pytest.raises(SessionNotStartedException) as exc_info:
        session.add_time("2024-06-10", "9:00 AM")
    assert exc_info.value.details["operation"] == "add_time"


def test_seed_from_payload_enters_editing():
    session = SlotEditor("doc-1")

    changed = session.seed([{"date": "2024-06-10T00:00:00", "times": ["9:00 AM"]}])

    assert changed is True
    assert session.is_editing
    assert session.current.get("2024-06-10") == ("9:00 AM",)
    assert session.dirty is False


def test_seed_with_bad_payload_leaves_session_untouched(editor, sample_set):
    with pytest.raises(InvalidRecordException):
        editor.seed([{"times": ["9:00 AM"]}])
    assert editor.current == sample_set


def test_seed_does_not_notify(editor):
    listener = RecordingListener()
    editor.subscribe(listener)

    editor.seed([{"date": "2024-07-01", "times": ["1:00 PM"]}])

    assert listener.events == []


def test_add_time_notifies_with_encoded_payload(editor):
    listener = RecordingListener()
    editor.subscribe(listener)

    event = editor.add_time("2024-06-12", "3:00 PM")

    assert listener.events == [event]
    assert event.operation == "add_time"
    assert event.owner_id == "doc-1"
    assert event.days_affected == ["2024-06-12"]
    assert event.day_count == 2
    assert event.slot_count == 4
    assert event.dirty is True
    assert {"date": "2024-06-12T00:00:00", "times": ["10:00 AM", "3:00 PM"]} in event.payload
    assert editor.dirty is True


def test_add_time_uses_default_label(editor):
    editor.add_time(date(2024, 6, 14))
    assert editor.current.get("2024-06-14") == ("9:00 AM",)

    custom = SlotEditor("doc-2", default_time_label="7:30 AM")
    custom.seed([])
    custom.add_time("2024-06-14")
    assert custom.current.get("2024-06-14") == ("7:30 AM",)


def test_capacity_rejection_keeps_state_and_skips_listeners(editor, sample_set):
    listener = RecordingListener()
    editor.subscribe(listener)

    with pytest.raises(CapacityExceededException):
        editor.add_time("2024-06-10", "8:00 PM")

    assert editor.current == sample_set
    assert editor.dirty is False
    assert listener.events == []


def test_noop_mutations_return_none_and_stay_clean(editor):
    listener = RecordingListener()
    editor.subscribe(listener)

    assert editor.remove_time("2024-06-10", 5) is None
    assert editor.update_time("2024-06-12", 0, "10:00 AM") is None
    assert editor.clear_day("2024-06-30") is None

    assert listener.events == []
    assert editor.dirty is False


def test_remove_and_update_flow(editor):
    editor.update_time("2024-06-10", 1, "6:00 PM")
    editor.remove_time("2024-06-10", 0)

    assert editor.current.get("2024-06-10") == ("6:00 PM",)

    editor.remove_time("2024-06-10", 0)
    assert "2024-06-10" not in editor.current.days()


def test_clear_all_reports_every_cleared_day(editor):
    event = editor.clear_all()

    assert editor.current.is_empty()
    assert event.days_affected == ["2024-06-10", "2024-06-12"]
    assert event.payload == []
    assert editor.clear_all() is None


def test_apply_template_through_editor(editor):
    window = ["2024-06-10", "2024-06-11", "2024-06-12"]

    event = editor.apply_template_to_all_days(window)

    assert event.operation == "apply_template_to_all_days"
    assert event.days_affected == window
    for day in window:
        assert editor.current.get(day) == ("9:00 AM", "5:00 PM")


def test_identical_reseed_is_ignored_even_when_dirty(editor, sample_set):
    editor.add_time("2024-06-12", "3:00 PM")
    edited = editor.current

    changed = editor.seed_slot_set(
        SlotSet({"2024-06-12": ["10:00 AM"], "2024-06-10": ["9:00 AM", "5:00 PM"]})
    )

    assert changed is False
    assert editor.current == edited
    assert editor.dirty is True
    assert editor.baseline == sample_set


def test_different_reseed_replaces_edits(editor):
    editor.add_time("2024-06-12", "3:00 PM")

    changed = editor.seed([{"date": "2024-06-20", "times": ["8:00 AM"]}])

    assert changed is True
    assert editor.current.days() == ["2024-06-20"]
    assert editor.dirty is False


def test_discard_returns_to_uninitialized(editor):
    listener = RecordingListener()
    editor.subscribe(listener)
    editor.discard()

    assert editor.state is EditorState.UNINITIALIZED
    assert editor.current.is_empty()
    assert editor.baseline is None
    assert listener.events == []
    with pytest.raises(SessionNotStartedException):
        editor.clear_day("2024-06-10")


def test_mark_saved_moves_baseline(editor):
    editor.add_time("2024-06-13", "1:00 PM")
    editor.mark_saved()

    assert editor.dirty is False
    assert editor.baseline == editor.current
    # The saved schedule is now what an identical reseed is compared to
    assert editor.seed_slot_set(editor.current) is False


def test_unsubscribe_stops_notifications(editor):
    listener = RecordingListener()
    unsubscribe = editor.subscribe(listener)

    editor.add_time("2024-06-13", "1:00 PM")
    unsubscribe()
    unsubscribe()
    editor.add_time("2024-06-14", "1:00 PM")

    assert len(listener.events) == 1


def test_every_surface_sees_the_same_schedule(editor):
    first, second = RecordingListener(), RecordingListener()
    editor.subscribe(first)
    editor.subscribe(second)

    editor.clear_day("2024-06-12")

    assert first.events == second.events
    assert first.events[0].payload == editor.encoded()


def test_simple_picker_offers_half_hour_labels_but_accepts_any(editor):
    assert "9:30 AM" in SlotEditor.time_options
    assert "7:15 AM" not in SlotEditor.time_options

    editor.add_time("2024-06-14", "7:15 AM")
    assert editor.current.get("2024-06-14") == ("7:15 AM",)


def test_blank_label_is_kept_as_typed(editor):
    listener = RecordingListener()
    editor.subscribe(listener)

    event = editor.update_time("2024-06-12", 0, "")

    assert editor.current.get("2024-06-12") == ("",)
    assert {"date": "2024-06-12T00:00:00", "times": [""]} in event.payload
    assert listener.events == [event]
    assert editor.dirty is True


def test_failed_encode_leaves_session_unchanged(editor, sample_set, monkeypatch):
    listener = RecordingListener()
    editor.subscribe(listener)

    def broken_encode(slot_set):
        raise RuntimeError("encode failed")

    monkeypatch.setattr("doctor_slots.services.slot_editor.encode_payload", broken_encode)

    with pytest.raises(RuntimeError):
        editor.add_time("2024-06-13", "1:00 PM")

    assert editor.current == sample_set
    assert editor.dirty is False
    assert listener.events == []
