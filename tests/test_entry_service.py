"""Tests for the timer/entry engine."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.application.services import entry_service
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.domain.models.time_entry import TimeEntry
from app.domain.schemas.entry import EntryUpdate, ManualEntryCreate, TimerStart

from conftest import T0


def open_entries(db_session, user_id):
    return (
        db_session.query(TimeEntry)
        .filter(TimeEntry.user_id == user_id, TimeEntry.end_time.is_(None))
        .count()
    )


class TestStartTimer:

    def test_start_creates_open_entry(self, entries, projects, tasks, employee, website):
        entry = entry_service.start_timer(
            entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0
        )
        assert entry.id is not None
        assert entry.start_time == T0
        assert entry.end_time is None
        assert entry.duration_seconds == 0
        assert entry.project_name == "Website"

    def test_start_with_task(self, entries, projects, tasks, employee, ops, standup):
        entry = entry_service.start_timer(
            entries, projects, tasks, employee.id,
            TimerStart(project_id=ops.id, task_id=standup.id), now=T0,
        )
        assert entry.task_id == standup.id
        assert entry.task_name == "Standup"

    def test_second_start_conflicts(self, db_session, entries, projects, tasks, employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        with pytest.raises(ConflictError):
            entry_service.start_timer(
                entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0 + timedelta(minutes=1)
            )
        assert open_entries(db_session, employee.id) == 1

    def test_users_run_timers_independently(self, db_session, entries, projects, tasks, employee, other_employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        entry_service.start_timer(entries, projects, tasks, other_employee.id, TimerStart(project_id=website.id), now=T0)
        assert open_entries(db_session, employee.id) == 1
        assert open_entries(db_session, other_employee.id) == 1

    def test_unknown_project(self, entries, projects, tasks, employee):
        with pytest.raises(NotFoundError):
            entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=999), now=T0)

    def test_task_from_another_project(self, entries, projects, tasks, employee, website, standup):
        with pytest.raises(ValidationError):
            entry_service.start_timer(
                entries, projects, tasks, employee.id,
                TimerStart(project_id=website.id, task_id=standup.id), now=T0,
            )

    def test_concurrent_start_losing_at_the_index_is_a_conflict(
        self, monkeypatch, db_session, entries, projects, tasks, employee, website
    ):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)

        # the other request passed the active-timer check before this one committed
        with monkeypatch.context() as m:
            m.setattr(entries, "get_active", lambda *args, **kwargs: None)
            with pytest.raises(ConflictError):
                entry_service.start_timer(
                    entries, projects, tasks, employee.id,
                    TimerStart(project_id=website.id), now=T0 + timedelta(seconds=1),
                )

        assert open_entries(db_session, employee.id) == 1
        stopped = entry_service.stop_timer(entries, employee.id, now=T0 + timedelta(minutes=5))
        assert stopped.start_time == T0
        assert stopped.duration_seconds == 300

    def test_database_rejects_second_open_entry(self, entries, employee, website):
        """The partial unique index holds even when the application check is bypassed."""
        entries.create({"user_id": employee.id, "project_id": website.id, "start_time": T0})
        with pytest.raises(IntegrityError):
            entries.create({"user_id": employee.id, "project_id": website.id, "start_time": T0})

    def test_closed_entries_do_not_count_against_the_index(self, entries, employee, website):
        for day in range(3):
            start = T0 + timedelta(days=day)
            entries.create({
                "user_id": employee.id,
                "project_id": website.id,
                "start_time": start,
                "end_time": start + timedelta(hours=1),
                "duration_seconds": 3600,
            })
        entries.create({"user_id": employee.id, "project_id": website.id, "start_time": T0 + timedelta(days=5)})
        assert entries.get_active(employee.id) is not None


class TestStopTimer:

    def test_stop_computes_duration(self, entries, projects, tasks, employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        entry = entry_service.stop_timer(entries, employee.id, now=T0 + timedelta(seconds=3661))
        assert entry.end_time == T0 + timedelta(seconds=3661)
        assert entry.duration_seconds == 3661
        assert entry_service.get_active_entry(entries, employee.id) is None

    def test_stop_floors_fractional_seconds(self, entries, projects, tasks, employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        entry = entry_service.stop_timer(entries, employee.id, now=T0 + timedelta(seconds=59, microseconds=999000))
        assert entry.duration_seconds == 59

    def test_stop_keeps_negative_duration_on_clock_skew(self, entries, projects, tasks, employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        entry = entry_service.stop_timer(entries, employee.id, now=T0 - timedelta(seconds=5))
        assert entry.duration_seconds == -5

    def test_stop_without_timer(self, entries, employee):
        with pytest.raises(NotFoundError):
            entry_service.stop_timer(entries, employee.id, now=T0)

    def test_start_stop_cycles_keep_single_active(self, db_session, entries, projects, tasks, employee, website):
        now = T0
        for _ in range(3):
            entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=now)
            assert open_entries(db_session, employee.id) == 1
            now += timedelta(minutes=30)
            entry_service.stop_timer(entries, employee.id, now=now)
            assert open_entries(db_session, employee.id) == 0
        assert len(entry_service.list_entries(entries, employee.id)) == 3


class TestManualEntry:

    def test_start_end_shape(self, entries, projects, tasks, employee, website):
        body = ManualEntryCreate(project_id=website.id, start=T0, end=T0 + timedelta(minutes=45))
        entry = entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "UTC")
        assert entry.start_time == T0
        assert entry.end_time == T0 + timedelta(minutes=45)
        assert entry.duration_seconds == 2700

    def test_end_before_start_is_rejected(self, db_session, entries, projects, tasks, employee, website):
        body = ManualEntryCreate(project_id=website.id, start=T0, end=T0 - timedelta(minutes=1))
        with pytest.raises(ValidationError):
            entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "UTC")
        assert db_session.query(TimeEntry).count() == 0

    def test_date_minutes_shape_is_anchored_at_noon(self, entries, projects, tasks, employee, website):
        body = ManualEntryCreate(project_id=website.id, entry_date=date(2024, 3, 1), minutes=90)
        entry = entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "UTC")
        assert entry.duration_seconds == 5400
        assert entry.end_time == datetime(2024, 3, 1, 12, 0)
        assert entry.start_time == datetime(2024, 3, 1, 10, 30)

    def test_custom_anchor_hour(self, entries, projects, tasks, employee, website):
        body = ManualEntryCreate(project_id=website.id, entry_date=date(2024, 3, 1), minutes=60)
        entry = entry_service.create_manual_entry(
            entries, projects, tasks, employee.id, body, "UTC", anchor_hour=17
        )
        assert entry.end_time == datetime(2024, 3, 1, 17, 0)

    def test_aware_timestamps_are_stored_as_local_wall_time(self, entries, projects, tasks, employee, website):
        start = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        body = ManualEntryCreate(project_id=website.id, start=start, end=start + timedelta(hours=2))
        entry = entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "Europe/Berlin")
        assert entry.start_time == datetime(2024, 3, 1, 9, 0)
        assert entry.end_time == datetime(2024, 3, 1, 11, 0)
        assert entry.duration_seconds == 7200

    def test_manual_entry_does_not_touch_running_timer(self, entries, projects, tasks, employee, website):
        entry_service.start_timer(entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0)
        body = ManualEntryCreate(project_id=website.id, entry_date=date(2024, 2, 28), minutes=30)
        entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "UTC")
        assert entry_service.get_active_entry(entries, employee.id).start_time == T0

    @pytest.mark.parametrize("payload", [
        {"projectId": 1},
        {"projectId": 1, "start": "2024-03-01T09:00:00"},
        {"projectId": 1, "date": "2024-03-01"},
        {"projectId": 1, "start": "2024-03-01T09:00:00", "end": "2024-03-01T10:00:00", "date": "2024-03-01", "minutes": 5},
        {"projectId": 1, "date": "2024-03-01", "minutes": 0},
    ])
    def test_request_shape_validation(self, payload):
        with pytest.raises(ValueError):
            ManualEntryCreate.model_validate(payload)


class TestEditAndDelete:

    @pytest.fixture
    def entry(self, entries, projects, tasks, employee, website):
        body = ManualEntryCreate(project_id=website.id, start=T0, end=T0 + timedelta(hours=1))
        return entry_service.create_manual_entry(entries, projects, tasks, employee.id, body, "UTC")

    def test_edit_rewrites_fields_and_duration(self, entries, projects, tasks, employee, entry, ops, standup):
        body = EntryUpdate(
            project_id=ops.id, task_id=standup.id,
            start=T0 + timedelta(hours=2), end=T0 + timedelta(hours=2, minutes=15, seconds=30),
        )
        edited = entry_service.edit_entry(entries, projects, tasks, entry.id, body, employee, "UTC")
        assert edited.id == entry.id
        assert edited.user_id == employee.id
        assert edited.project_id == ops.id
        assert edited.task_id == standup.id
        assert edited.duration_seconds == 930

    def test_edit_keeps_negative_span(self, entries, projects, tasks, employee, entry, website):
        body = EntryUpdate(project_id=website.id, start=T0, end=T0 - timedelta(seconds=10))
        edited = entry_service.edit_entry(entries, projects, tasks, entry.id, body, employee, "UTC")
        assert edited.duration_seconds == -10

    def test_edit_by_another_employee_is_forbidden(self, entries, projects, tasks, other_employee, entry, website):
        body = EntryUpdate(project_id=website.id, start=T0, end=T0 + timedelta(hours=3))
        with pytest.raises(ForbiddenError):
            entry_service.edit_entry(entries, projects, tasks, entry.id, body, other_employee, "UTC")

    def test_admin_may_edit_any_entry(self, entries, projects, tasks, admin, entry, website):
        body = EntryUpdate(project_id=website.id, start=T0, end=T0 + timedelta(hours=3))
        edited = entry_service.edit_entry(entries, projects, tasks, entry.id, body, admin, "UTC")
        assert edited.duration_seconds == 3 * 3600

    def test_edit_unknown_entry(self, entries, projects, tasks, employee, website):
        body = EntryUpdate(project_id=website.id, start=T0, end=T0 + timedelta(hours=1))
        with pytest.raises(NotFoundError):
            entry_service.edit_entry(entries, projects, tasks, 404, body, employee, "UTC")

    def test_owner_deletes(self, db_session, entries, employee, entry):
        entry_id = entry.id
        entry_service.delete_entry(entries, entry_id, employee)
        assert db_session.query(TimeEntry).filter(TimeEntry.id == entry_id).count() == 0

    def test_other_employee_cannot_delete(self, db_session, entries, other_employee, entry):
        with pytest.raises(ForbiddenError):
            entry_service.delete_entry(entries, entry.id, other_employee)
        assert db_session.query(TimeEntry).count() == 1

    def test_admin_deletes_any(self, db_session, entries, admin, entry):
        entry_service.delete_entry(entries, entry.id, admin)
        assert db_session.query(TimeEntry).count() == 0


class TestListEntries:

    def test_only_closed_entries_newest_first(self, entries, projects, tasks, employee, website):
        for day in range(3):
            start = T0 + timedelta(days=day)
            entry_service.create_manual_entry(
                entries, projects, tasks, employee.id,
                ManualEntryCreate(project_id=website.id, start=start, end=start + timedelta(hours=1)), "UTC",
            )
        entry_service.start_timer(
            entries, projects, tasks, employee.id, TimerStart(project_id=website.id), now=T0 + timedelta(days=9)
        )

        listed = entry_service.list_entries(entries, employee.id)
        assert [e.start_time for e in listed] == [T0 + timedelta(days=d) for d in (2, 1, 0)]
        assert all(e.end_time is not None for e in listed)
        assert listed[0].project_name == "Website"
        assert listed[0].project_color == "#8884d8"

    def test_limit(self, entries, projects, tasks, employee, website):
        for i in range(5):
            start = T0 + timedelta(hours=i)
            entry_service.create_manual_entry(
                entries, projects, tasks, employee.id,
                ManualEntryCreate(project_id=website.id, start=start, end=start + timedelta(minutes=10)), "UTC",
            )
        assert len(entry_service.list_entries(entries, employee.id, limit=2)) == 2

    def test_other_users_entries_are_excluded(self, entries, projects, tasks, employee, other_employee, website):
        entry_service.create_manual_entry(
            entries, projects, tasks, other_employee.id,
            ManualEntryCreate(project_id=website.id, start=T0, end=T0 + timedelta(hours=1)), "UTC",
        )
        assert entry_service.list_entries(entries, employee.id) == []
