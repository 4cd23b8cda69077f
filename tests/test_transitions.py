import threading

import pytest

from utils.transitions import (
    ClassList,
    DocumentMarkers,
    ManualScheduler,
    ThreadingScheduler,
    TransitionController,
    TransitionPhase,
    create_scheduler,
)
from conftest import EPSILON


def make_controller(scheduler, marker=None, marker_class='theme-transition'):
    marker = marker if marker is not None else ClassList()
    return TransitionController(scheduler, marker, marker_class,
                                stage_delay=0.05, settle_delay=0.3)


def test_transition_walks_through_all_phases(manual_scheduler):
    commits = []
    controller = make_controller(manual_scheduler)

    assert controller.begin_transition(lambda: commits.append(True)) is True
    assert controller.phase is TransitionPhase.STAGING
    assert controller.is_transitioning
    assert 'theme-transition' in controller.marker
    assert commits == []

    manual_scheduler.advance(0.05 + EPSILON)
    assert commits == [True]
    assert controller.phase is TransitionPhase.SETTLING
    assert 'theme-transition' in controller.marker

    manual_scheduler.advance(0.3)
    assert controller.phase is TransitionPhase.IDLE
    assert not controller.is_transitioning
    assert 'theme-transition' not in controller.marker


def test_commit_waits_for_stage_delay(manual_scheduler):
    commits = []
    controller = make_controller(manual_scheduler)
    controller.begin_transition(lambda: commits.append(True))

    manual_scheduler.advance(0.049)
    assert commits == []


@pytest.mark.parametrize('commit', [
    lambda: None,
    lambda: sum(range(1000)),
    lambda: [].append(1),
])
def test_flag_returns_to_false_after_both_delays(manual_scheduler, commit):
    controller = make_controller(manual_scheduler)
    controller.begin_transition(commit)

    manual_scheduler.advance(controller.duration + EPSILON)

    assert controller.is_transitioning is False
    assert manual_scheduler.pending == 0


def test_second_begin_is_rejected_while_active(manual_scheduler):
    commits = []
    controller = make_controller(manual_scheduler)

    assert controller.begin_transition(lambda: commits.append('first'))
    assert controller.begin_transition(lambda: commits.append('second')) is False

    manual_scheduler.advance(0.05 + EPSILON)
    assert controller.begin_transition(lambda: commits.append('third')) is False

    manual_scheduler.advance(0.3)
    assert commits == ['first']
    assert controller.begin_transition(lambda: commits.append('fourth'))


def test_failing_commit_still_settles(manual_scheduler, caplog):
    def boom():
        raise RuntimeError('commit failed')

    controller = make_controller(manual_scheduler)
    controller.begin_transition(boom)
    manual_scheduler.advance(controller.duration + EPSILON)

    assert controller.phase is TransitionPhase.IDLE
    assert 'theme-transition' not in controller.marker
    assert 'commit failed' in caplog.text


def test_cancel_during_staging_skips_commit(manual_scheduler):
    commits = []
    controller = make_controller(manual_scheduler)
    controller.begin_transition(lambda: commits.append(True))

    controller.cancel()
    manual_scheduler.advance(1.0)

    assert commits == []
    assert controller.phase is TransitionPhase.IDLE
    assert len(controller.marker) == 0


def test_cancel_during_settling_removes_marker(manual_scheduler):
    controller = make_controller(manual_scheduler)
    controller.begin_transition(lambda: None)
    manual_scheduler.advance(0.05 + EPSILON)

    controller.cancel()

    assert controller.phase is TransitionPhase.IDLE
    assert 'theme-transition' not in controller.marker
    assert manual_scheduler.pending == 0


def test_controllers_sharing_a_marker_list_keep_their_own_class(manual_scheduler):
    markers = DocumentMarkers()
    theme = make_controller(manual_scheduler, markers.body, 'theme-transition')
    language = make_controller(manual_scheduler, markers.body, 'language-transition')

    theme.begin_transition(lambda: None)
    manual_scheduler.advance(0.2)
    language.begin_transition(lambda: None)
    assert list(markers.body) == ['theme-transition', 'language-transition']

    manual_scheduler.advance(0.2)
    assert list(markers.body) == ['language-transition']

    manual_scheduler.advance(0.2)
    assert list(markers.body) == []


def test_manual_scheduler_fires_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.call_later(0.3, lambda: fired.append('late'))
    scheduler.call_later(0.1, lambda: fired.append('early'))
    cancelled = scheduler.call_later(0.2, lambda: fired.append('cancelled'))
    cancelled.cancel()

    scheduler.advance(0.5)

    assert fired == ['early', 'late']
    assert scheduler.now == pytest.approx(0.5)


def test_threading_scheduler_runs_a_full_transition():
    done = threading.Event()
    controller = TransitionController(ThreadingScheduler(), ClassList(), 'theme-transition',
                                      stage_delay=0.01, settle_delay=0.01)
    controller.begin_transition(done.set)

    assert done.wait(timeout=2)
    for _ in range(200):
        if not controller.is_transitioning:
            break
        threading.Event().wait(0.01)
    assert controller.is_transitioning is False
    assert len(controller.marker) == 0


def test_class_list_toggle_with_force():
    classes = ClassList('a')
    assert classes.toggle('dark', True) is True
    assert classes.toggle('dark', True) is True
    assert str(classes) == 'a dark'
    assert classes.toggle('dark') is False
    assert classes.toggle('missing', False) is False
    assert list(classes) == ['a']


def test_create_scheduler_rejects_unknown_kind():
    assert isinstance(create_scheduler('manual'), ManualScheduler)
    assert isinstance(create_scheduler('threading'), ThreadingScheduler)
    with pytest.raises(ValueError):
        create_scheduler('asyncio')
