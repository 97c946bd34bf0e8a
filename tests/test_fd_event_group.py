from rocketrpc.fd_event_group import FdEventGroup, get_fd_event_group


def test_returns_event_for_fd_and_same_object_each_time():
    group = FdEventGroup(16)
    event = group.get_fd_event(5)
    assert event.fd == 5
    assert group.get_fd_event(5) is event


def test_grows_for_large_fd():
    group = FdEventGroup(4)
    event = group.get_fd_event(10)
    assert event.fd == 10
    assert len(group) > 10
    assert all(group.get_fd_event(i).fd == i for i in range(len(group)))


def test_empty_group_can_grow_from_zero():
    group = FdEventGroup(0)
    assert group.get_fd_event(0).fd == 0
    assert len(group) >= 1


def test_global_group_is_shared():
    group = get_fd_event_group()
    assert get_fd_event_group() is group
    assert group.get_fd_event(3).fd == 3