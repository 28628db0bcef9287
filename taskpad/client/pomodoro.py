"""Minuteur pomodoro"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

LONG_BREAK_EVERY = 4
TEST_DURATION = 2  # secondes


class Mode(str, Enum):
    POMODORO = "pomodoro"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"
    TEST = "test"


WORK_MODES = (Mode.POMODORO, Mode.TEST)


@dataclass(frozen=True)
class PomodoroSettings:
    """Durations in minutes."""
    pomodoro: int = 25
    short_break: int = 5
    long_break: int = 15

    def __post_init__(self):
        for name in ("pomodoro", "short_break", "long_break"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    def duration(self, mode: Mode) -> int:
        if mode is Mode.TEST:
            return TEST_DURATION
        return getattr(self, mode.value) * 60


def format_time(seconds: int) -> str:
    """MM:SS, or HH:MM:SS from one hour up."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


class PomodoroTimer:
    def __init__(
        self,
        settings: Optional[PomodoroSettings] = None,
        task_title: Optional[str] = None,
        on_commit: Optional[Callable[[int], object]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or PomodoroSettings()
        self.task_title = task_title
        self.on_commit = on_commit
        self._clock = clock

        self.mode = Mode.POMODORO
        self.last_work_mode = Mode.POMODORO
        self.time_left = self.settings.duration(self.mode)
        self.is_active = False
        self.pomodoros_completed = 0
        self.completion_pending = False
        self.is_committing = False
        self._end_time: Optional[float] = None

    # --- contrôle ---

    def start(self) -> None:
        if self.is_active or self.completion_pending:
            return
        self._end_time = self._clock() + self.time_left
        self.is_active = True

    def pause(self) -> None:
        if not self.is_active:
            return
        self.tick()
        self._end_time = None
        self.is_active = False

    def toggle(self) -> None:
        if self.is_active:
            self.pause()
        else:
            self.start()

    def switch_mode(self, mode: Mode) -> None:
        mode = Mode(mode)
        self.is_active = False
        self._end_time = None
        self.mode = mode
        if mode in WORK_MODES:
            self.last_work_mode = mode
        self.time_left = self.settings.duration(mode)

    def reset(self) -> None:
        self.switch_mode(self.mode)

    def update_settings(self, settings: PomodoroSettings) -> None:
        # le mode test garde sa durée fixe
        self.settings = settings
        self.is_active = False
        self._end_time = None
        if self.mode is not Mode.TEST:
            self.time_left = settings.duration(self.mode)

    def tick(self) -> int:
        """Refresh time_left; flags completion when it reaches zero."""
        if not self.is_active or self._end_time is None:
            return self.time_left

        # calé sur l'heure de fin : un tick en retard ne fait pas dériver
        self.time_left = max(0, round(self._end_time - self._clock()))
        if self.time_left == 0:
            self.is_active = False
            self._end_time = None
            self.completion_pending = True
            logger.info("%s session finished", self.mode.value)
        return self.time_left

    def commit_session(self) -> None:
        if self.is_committing:
            return

        self.is_committing = True
        try:
            if self.mode in WORK_MODES:
                self.pomodoros_completed += 1
                if self.task_title and self.on_commit:
                    self._commit_time(self.settings.duration(self.mode))

                if self.pomodoros_completed % LONG_BREAK_EVERY == 0:
                    self.switch_mode(Mode.LONG_BREAK)
                else:
                    self.switch_mode(Mode.SHORT_BREAK)
            else:
                self.switch_mode(self.last_work_mode)
            self.completion_pending = False
        finally:
            self.is_committing = False

    def _commit_time(self, seconds: int) -> None:
        # un échec d'enregistrement ne doit pas bloquer le passage à la pause
        try:
            self.on_commit(seconds)
        except Exception:
            logger.exception("Failed to record %ss on '%s'", seconds, self.task_title)

    def request_close(self) -> bool:
        """True when closing needs a confirmation (timer running)."""
        return self.is_active

    # --- affichage ---

    @property
    def display(self) -> str:
        return format_time(self.time_left)

    def progress(self) -> float:
        total = self.settings.duration(self.mode)
        if total <= 0:
            return 0.0
        done = (total - self.time_left) / total * 100
        return max(0.0, min(100.0, done))
