"""Fréquence de répétition (jours) <-> champs repeat_type / repeat_interval"""

from typing import Optional, Tuple, Union

from taskpad.models.enums import RepeatType

DAILY_FREQUENCY = "1"
WEEKLY_FREQUENCY = "7"
MAX_REPEAT_DAYS = 3650  # 10 ans


class InvalidRepetitionFrequency(ValueError):
    pass


def normalize_repetition(
    frequency: Union[str, int, None],
) -> Tuple[RepeatType, Optional[int]]:
    """Map a repetition frequency to ``(repeat_type, repeat_interval)``.

    ``repeat_interval`` is only set for ``every_n_days``.
    Raises InvalidRepetitionFrequency for anything that is not empty or a
    positive integer up to MAX_REPEAT_DAYS.
    """
    if frequency is None:
        return RepeatType.NONE, None
    if isinstance(frequency, bool):
        raise InvalidRepetitionFrequency(f"Invalid repetition frequency: {frequency!r}")

    value = str(frequency).strip()
    if value == "":
        return RepeatType.NONE, None
    if not (value.isascii() and value.isdigit()):
        raise InvalidRepetitionFrequency(f"Invalid repetition frequency: {frequency!r}")

    days = int(value)
    if days <= 0:
        raise InvalidRepetitionFrequency(f"Repetition frequency must be positive: {frequency!r}")
    if days > MAX_REPEAT_DAYS:
        raise InvalidRepetitionFrequency(
            f"Repetition frequency must be at most {MAX_REPEAT_DAYS} days: {frequency!r}"
        )
    if days == int(DAILY_FREQUENCY):
        return RepeatType.DAILY, None
    if days == int(WEEKLY_FREQUENCY):
        return RepeatType.WEEKLY, None
    return RepeatType.EVERY_N_DAYS, days


def repetition_frequency(repeat_type: Union[RepeatType, str, None], repeat_interval: Optional[int]) -> str:
    """Inverse of normalize_repetition, used to prefill the edit form."""
    repeat_type = RepeatType(repeat_type) if repeat_type else RepeatType.NONE
    if repeat_type is RepeatType.DAILY:
        return DAILY_FREQUENCY
    if repeat_type is RepeatType.WEEKLY:
        return WEEKLY_FREQUENCY
    if repeat_type is RepeatType.EVERY_N_DAYS and repeat_interval:
        return str(repeat_interval)
    return ""
