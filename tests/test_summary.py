from shiftmaker.domain.models import Assignment, ShiftSlot, Staff
from shiftmaker.domain.warnings import ScheduleWarning, WarningType
from shiftmaker.services.summary import assignments_frame, format_warnings, summarize_schedule


def test_empty_month():
    assert summarize_schedule([], [], []) == "No assignments."
    assert assignments_frame([]).empty


def test_summary_tables():
    slots = [ShiftSlot(id="pm", label="Evening", order=2), ShiftSlot(id="am", label="Morning", order=1)]
    staff = [Staff(id="a", name="Anna"), Staff(id="b", name="Ben")]
    assignments = [
        Assignment(id="1", date="2026-02-02", slot_id="am", staff_id="a", is_manual=False),
        Assignment(id="2", date="2026-02-02", slot_id="pm", staff_id="b", is_manual=False),
        Assignment(id="3", date="2026-02-03", slot_id="am", staff_id="a", is_manual=True),
    ]

    text = summarize_schedule(assignments, staff, slots)

    assert "Headcount per day per slot:" in text
    assert text.index("Morning") < text.index("Evening")
    assert "Manual assignments: 1" in text
    assert "Anna" in text and "Ben" in text


def test_format_warnings():
    warnings = [ScheduleWarning(type=WarningType.ROLE_SHORTAGE, message="short")]
    assert format_warnings(warnings) == ["[role_shortage] short"]
