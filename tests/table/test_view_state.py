from unittest.mock import Mock

from commitgrid.events import EventBus, VisiblePackReplacedEvent
from commitgrid.models.visible_pack import VisiblePack
from commitgrid.table.more_data import MoreDataCoordinator, MoreDataState
from commitgrid.table.view_state import WindowedViewState

from conftest import make_pack


def test_starts_with_the_empty_pack(qapp) -> None:
    state = WindowedViewState()
    assert state.current() is VisiblePack.EMPTY
    assert state.replacements() == 0


def test_replace_clears_pending_and_updates_availability(qapp) -> None:
    state = WindowedViewState()
    requester = Mock()
    coordinator = MoreDataCoordinator(state.current, requester)
    state.bind_coordinator(coordinator)

    state.replace(make_pack(10, can_request_more=True))
    assert coordinator.request_more(lambda: None)
    assert coordinator.state is MoreDataState.PENDING

    final = make_pack(15, can_request_more=False, generation=2)
    state.replace(final)
    assert state.current() is final
    assert coordinator.state is MoreDataState.IDLE
    assert coordinator.can_request_more() == final.can_request_more


def test_signals_bracket_the_swap(qapp) -> None:
    state = WindowedViewState()
    old = state.current()
    new = make_pack(3)
    observed = []
    state.aboutToReplace.connect(lambda pack: observed.append(("about", state.current() is old, pack)))
    state.packReplaced.connect(lambda pack: observed.append(("replaced", state.current() is new, pack)))

    state.replace(new)

    assert observed == [("about", True, new), ("replaced", True, new)]
    assert state.replacements() == 1


def test_replacement_is_published(qapp) -> None:
    bus = EventBus()
    events = []
    bus.subscribe(VisiblePackReplacedEvent, events.append)
    state = WindowedViewState(bus)
    state.replace(make_pack(4, can_request_more=True, generation=9))
    assert len(events) == 1
    assert (events[0].row_count, events[0].generation, events[0].can_request_more) == (4, 9, True)
