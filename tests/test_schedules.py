"""
Tests for dosing schedule generation.
"""
import pytest

from medsafety.medications.models import MedicationFrequency
from medsafety.schedules.generator import generate_scheduled_times
from medsafety.schedules.service import get_active_schedule, list_schedules


@pytest.mark.parametrize("frequency, expected", [
    ("once_daily", ["08:00"]),
    ("twice_daily", ["08:00", "20:00"]),
    ("three_times_daily", ["08:00", "14:00", "20:00"]),
    ("four_times_daily", ["06:00", "12:00", "18:00", "22:00"]),
    ("every_6_hours", ["06:00", "12:00", "18:00", "00:00"]),
    ("every_8_hours", ["08:00", "16:00", "00:00"]),
    ("every_12_hours", ["08:00", "20:00"]),
])
def test_schedule_table(frequency, expected):
    assert generate_scheduled_times(frequency) == expected


@pytest.mark.parametrize("frequency", ["weekly", "twice_weekly", "monthly", "as_needed", "custom", "hourly", ""])
def test_unscheduled_codes_default_to_morning(frequency):
    assert generate_scheduled_times(frequency) == ["08:00"]


def test_accepts_enum_members():
    assert generate_scheduled_times(MedicationFrequency.THREE_TIMES_DAILY) == ["08:00", "14:00", "20:00"]


def test_generated_lists_are_independent():
    """
    Mutating a returned list must not leak into later calls.
    """
    times = generate_scheduled_times("twice_daily")
    times.append("23:00")
    assert generate_scheduled_times("twice_daily") == ["08:00", "20:00"]


def test_prescription_creates_one_active_schedule(db, prescribe):
    medication, _, _ = prescribe(frequency="three_times_daily")

    schedule = get_active_schedule(db, medication.id)
    assert schedule is not None
    assert schedule.scheduled_times == ["08:00", "14:00", "20:00"]
    assert schedule.patient_id == medication.patient_id
    assert len(list_schedules(db, medication.patient_id)) == 1


def test_prn_medication_has_no_schedule(db, prescribe):
    medication, _, _ = prescribe(name="Paracetamol", frequency="as_needed", is_prn=True)

    assert get_active_schedule(db, medication.id) is None
    assert list_schedules(db, medication.patient_id) == []
