"""
Frequency code to daily dosing times.

The table holds canonical dosing windows rather than computed intervals and
must stay exactly as is: existing schedules and compliance figures depend on it.
"""
from typing import Dict, List, Tuple, Union

from ..medications.models import MedicationFrequency

DEFAULT_TIMES: Tuple[str, ...] = ("08:00",)

SCHEDULE_TABLE: Dict[MedicationFrequency, Tuple[str, ...]] = {
    MedicationFrequency.ONCE_DAILY: ("08:00",),
    MedicationFrequency.TWICE_DAILY: ("08:00", "20:00"),
    MedicationFrequency.THREE_TIMES_DAILY: ("08:00", "14:00", "20:00"),
    MedicationFrequency.FOUR_TIMES_DAILY: ("06:00", "12:00", "18:00", "22:00"),
    MedicationFrequency.EVERY_6_HOURS: ("06:00", "12:00", "18:00", "00:00"),
    MedicationFrequency.EVERY_8_HOURS: ("08:00", "16:00", "00:00"),
    MedicationFrequency.EVERY_12_HOURS: ("08:00", "20:00"),
}


def generate_scheduled_times(frequency: Union[MedicationFrequency, str]) -> List[str]:
    """
    Return the daily clock times for a frequency code.

    Weekly, monthly, as-needed, custom and unrecognized codes fall back to a
    single 08:00 dose.

    Args:
        frequency: Frequency enum member or its string code

    Returns:
        List[str]: "HH:MM" times in dosing order
    """
    try:
        code = MedicationFrequency(frequency)
    except ValueError:
        return list(DEFAULT_TIMES)
    return list(SCHEDULE_TABLE.get(code, DEFAULT_TIMES))
