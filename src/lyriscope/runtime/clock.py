"""
Playback clocks.

The lyric and energy loops only ever read a clock; whoever owns playback
advances it.
"""

import abc
from typing import Callable


class PlaybackClock(abc.ABC):
    """Read-only view of a playback position."""

    def __init__(self):
        self._play_listeners: list[Callable[[], None]] = []

    @property
    @abc.abstractmethod
    def current_time(self) -> float:
        """Seconds from track start. May jump backwards on seek."""

    @property
    @abc.abstractmethod
    def duration(self) -> float | None:
        """Track length in seconds, or None while unknown."""

    @property
    @abc.abstractmethod
    def playing(self) -> bool:
        pass

    def add_play_listener(self, callback: Callable[[], None]):
        self._play_listeners.append(callback)

    def remove_play_listener(self, callback: Callable[[], None]):
        if callback in self._play_listeners:
            self._play_listeners.remove(callback)

    def _emit_play(self):
        for callback in list(self._play_listeners):
            callback()


class ManualClock(PlaybackClock):
    """
    A clock moved by hand.

    Used by the offline renderer, which advances it one frame at a time,
    and by tests.
    """

    def __init__(self, duration: float | None = None):
        super().__init__()
        self._time = 0.0
        self._duration = duration
        self._playing = False

    @property
    def current_time(self) -> float:
        return self._time

    @property
    def duration(self) -> float | None:
        return self._duration

    @duration.setter
    def duration(self, value: float | None):
        self._duration = value

    @property
    def playing(self) -> bool:
        return self._playing

    def play(self):
        was_playing = self._playing
        self._playing = True
        if not was_playing:
            self._emit_play()

    def pause(self):
        self._playing = False

    def seek(self, time: float):
        self._time = max(0.0, time)

    def advance(self, dt: float):
        if self._playing:
            self._time += dt
