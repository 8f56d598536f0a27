from dataclasses import dataclass
from unittest.mock import Mock

from commitgrid.events import Event, EventBus, MoreDataRequestedEvent, VisiblePackReplacedEvent


@dataclass(kw_only=True)
class PingEvent(Event):
    value: int = 0


def test_publish_reaches_subscribers_of_the_type():
    bus = EventBus()
    received = []
    bus.subscribe(PingEvent, received.append)
    bus.subscribe(MoreDataRequestedEvent, Mock())

    bus.publish(PingEvent(value=3))

    assert [event.value for event in received] == [3]
    assert received[0].event_id


def test_unsubscribe_and_cancel():
    bus = EventBus()
    handler = Mock()
    subscription = bus.subscribe(PingEvent, handler)
    assert bus.subscriber_count(PingEvent) == 1
    bus.unsubscribe(subscription)
    bus.unsubscribe(subscription)
    bus.publish(PingEvent())
    handler.assert_not_called()

    other = bus.subscribe(PingEvent, handler)
    other.cancel()
    assert bus.subscriber_count(PingEvent) == 0


def test_failing_handler_does_not_stop_delivery():
    logger = Mock()
    bus = EventBus(logger)
    later = Mock()
    bus.subscribe(PingEvent, Mock(side_effect=RuntimeError("bad handler")))
    bus.subscribe(PingEvent, later)

    bus.publish(PingEvent())

    later.assert_called_once()
    logger.exception.assert_called_once()


def test_view_events_carry_their_payload():
    replaced = VisiblePackReplacedEvent(row_count=5, generation=2, can_request_more=True)
    assert (replaced.row_count, replaced.generation, replaced.can_request_more) == (5, 2, True)
    assert MoreDataRequestedEvent(row_count=9).row_count == 9
