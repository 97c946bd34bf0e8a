import time

from rocketrpc.timer_event import TimerEvent
from rocketrpc.util import get_now_ms


def test_arrive_time_is_now_plus_interval():
    before = get_now_ms()
    event = TimerEvent(500, False, None)
    after = get_now_ms()
    assert before + 500 <= event.arrive_time <= after + 500


def test_reset_arrive_time_moves_forward():
    event = TimerEvent(200, True, None)
    old = event.arrive_time
    time.sleep(0.02)
    before = get_now_ms()
    event.reset_arrive_time()
    after = get_now_ms()
    assert event.arrive_time >= old
    assert before + 200 <= event.arrive_time <= after + 200


def test_new_event_is_not_cancelled_and_keeps_fields():
    def cb():
        pass

    event = TimerEvent(10, True, cb)
    assert event.cancelled is False
    assert event.is_repeated is True
    assert event.callback is cb
    event.cancelled = True
    assert event.cancelled is True


def test_events_compare_by_identity():
    first = TimerEvent(10, False, None)
    second = TimerEvent(10, False, None)
    second.arrive_time = first.arrive_time
    assert not (first == second)
    assert first == first