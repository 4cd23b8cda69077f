"""
Transitions Module - Timed two-phase value changes behind a visual marker

A transition moves through three phases:

    IDLE -> STAGING -> SETTLING -> IDLE

``begin_transition`` adds the marker class and schedules the stage timer.
When the stage delay elapses the owner's commit callback runs, then the
settle timer is scheduled. When that elapses the marker is removed and the
controller is idle again. Only one timer handle is pending at a time.
"""

import heapq
import itertools
import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_STAGE_DELAY = 0.05
DEFAULT_SETTLE_DELAY = 0.3


class TransitionPhase(str, Enum):
    IDLE = 'idle'
    STAGING = 'staging'
    SETTLING = 'settling'


class ClassList:
    """Ordered set of CSS class names rendered on one document element"""

    def __init__(self, *names):
        self._names = dict.fromkeys(names)
        self._lock = threading.Lock()

    def add(self, name):
        with self._lock:
            self._names[name] = None

    def remove(self, name):
        with self._lock:
            self._names.pop(name, None)

    def toggle(self, name, force=None):
        """Toggle ``name``; with ``force`` set, add (True) or remove (False)"""
        with self._lock:
            present = name in self._names
            wanted = (not present) if force is None else bool(force)
            if wanted:
                self._names[name] = None
            else:
                self._names.pop(name, None)
            return wanted

    def __contains__(self, name):
        return name in self._names

    def __iter__(self):
        with self._lock:
            return iter(list(self._names))

    def __len__(self):
        return len(self._names)

    def __str__(self):
        return ' '.join(self)

    def __repr__(self):
        return f'ClassList({list(self)!r})'


class DocumentMarkers:
    """Class lists for the two elements the shell marks: <html> and <body>"""

    def __init__(self):
        self.root = ClassList()
        self.body = ClassList()

    def as_dict(self):
        return {'root': list(self.root), 'body': list(self.body)}


# ========== SCHEDULERS ========== #

class ThreadingScheduler:
    """Runs callbacks on daemon timer threads"""

    def call_later(self, delay, callback):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class _ManualTimer:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock; callbacks fire only when ``advance`` moves time past them.

    Callbacks scheduled while advancing fire in the same call when they fall
    due before the new time.
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._counter = itertools.count()
        self._lock = threading.RLock()

    def call_later(self, delay, callback):
        with self._lock:
            timer = _ManualTimer(self.now + delay, callback)
            heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
            return timer

    @property
    def pending(self):
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            with self._lock:
                if not self._queue or self._queue[0][0] > target:
                    break
                due, _, timer = heapq.heappop(self._queue)
                self.now = max(self.now, due)
            if not timer.cancelled:
                timer.callback()
        self.now = target


def create_scheduler(kind):
    """Build the scheduler named by the TRANSITION_SCHEDULER setting"""
    if kind == 'manual':
        return ManualScheduler()
    if kind == 'threading':
        return ThreadingScheduler()
    raise ValueError(f"Unknown transition scheduler: {kind}")


# ========== CONTROLLER ========== #

class TransitionController:
    """
    Stages a value change behind a marker class on a shared class list.

    Args:
        scheduler: object with ``call_later(delay, callback) -> handle``
        marker: ClassList that receives the marker class
        marker_class (str): class name present while a transition runs
        stage_delay (float): seconds between marking and committing
        settle_delay (float): seconds between committing and unmarking
    """

    def __init__(self, scheduler, marker, marker_class,
                 stage_delay=DEFAULT_STAGE_DELAY, settle_delay=DEFAULT_SETTLE_DELAY):
        self.scheduler = scheduler
        self.marker = marker
        self.marker_class = marker_class
        self.stage_delay = stage_delay
        self.settle_delay = settle_delay
        self._phase = TransitionPhase.IDLE
        self._commit = None
        self._handle = None
        self._lock = threading.RLock()

    @property
    def phase(self):
        return self._phase

    @property
    def is_transitioning(self):
        return self._phase is not TransitionPhase.IDLE

    @property
    def duration(self):
        return self.stage_delay + self.settle_delay

    def begin_transition(self, commit):
        """
        Start a transition that will run ``commit`` after the stage delay.

        Returns:
            bool: False when a transition is already running; nothing changes
        """
        with self._lock:
            if self._phase is not TransitionPhase.IDLE:
                logger.debug("%s ignored: transition already %s",
                             self.marker_class, self._phase.value)
                return False
            self._phase = TransitionPhase.STAGING
            self._commit = commit
            self.marker.add(self.marker_class)
            self._handle = self.scheduler.call_later(self.stage_delay, self._on_staged)
            return True

    def _on_staged(self):
        with self._lock:
            if self._phase is not TransitionPhase.STAGING:
                return
            commit, self._commit = self._commit, None

        try:
            commit()
        except Exception:
            logger.exception("%s commit failed", self.marker_class)

        with self._lock:
            if self._phase is not TransitionPhase.STAGING:
                return
            self._phase = TransitionPhase.SETTLING
            self._handle = self.scheduler.call_later(self.settle_delay, self._on_settled)

    def _on_settled(self):
        with self._lock:
            if self._phase is not TransitionPhase.SETTLING:
                return
            self._finish()

    def cancel(self):
        """Drop any pending timer and return to idle without committing"""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            if self._phase is not TransitionPhase.IDLE:
                logger.debug("%s cancelled while %s", self.marker_class, self._phase.value)
            self._commit = None
            self._finish()

    def _finish(self):
        self.marker.remove(self.marker_class)
        self._phase = TransitionPhase.IDLE
        self._handle = None
