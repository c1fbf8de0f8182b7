import unittest
from unittest.mock import Mock

from ..core.event_bus import EventBus
from ..events import EventType


class TestEventBus(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()

    def test_publish_passes_data_and_event_type(self):
        callback = Mock()
        self.bus.subscribe(EventType.FETCH_STARTED, callback)

        self.bus.publish(EventType.FETCH_STARTED, key="docs", page=0)

        callback.assert_called_once_with(
            event_type="fetch_started",
            event_enum=EventType.FETCH_STARTED,
            key="docs",
            page=0,
        )

    def test_duplicate_subscription_is_ignored(self):
        callback = Mock()
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.assertEqual(self.bus.get_subscriber_count(EventType.STATE_CHANGED), 1)

    def test_unsubscribe(self):
        callback = Mock()
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.assertTrue(self.bus.unsubscribe(EventType.STATE_CHANGED, callback))
        self.assertFalse(self.bus.unsubscribe(EventType.STATE_CHANGED, callback))
        self.assertFalse(self.bus.has_subscribers(EventType.STATE_CHANGED))
        self.assertEqual(self.bus.get_event_types(), set())

    def test_failing_callback_does_not_stop_others(self):
        broken = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        self.bus.subscribe(EventType.FETCH_FAILED, broken)
        self.bus.subscribe(EventType.FETCH_FAILED, healthy)

        self.bus.publish(EventType.FETCH_FAILED, key="docs")

        healthy.assert_called_once()

    def test_callback_may_unsubscribe_itself(self):
        calls = []

        def once(**event):
            calls.append(event["key"])
            self.bus.unsubscribe(EventType.STATE_CHANGED, once)

        self.bus.subscribe(EventType.STATE_CHANGED, once)
        self.bus.publish(EventType.STATE_CHANGED, key="a")
        self.bus.publish(EventType.STATE_CHANGED, key="b")
        self.assertEqual(calls, ["a"])

    def test_key_scoped_subscription_only_sees_its_key(self):
        docs, everything = Mock(), Mock()
        self.bus.subscribe_key(EventType.STATE_CHANGED, "docs", docs)
        self.bus.subscribe(EventType.STATE_CHANGED, everything)

        self.bus.publish(EventType.STATE_CHANGED, key="herd", state=None)
        self.bus.publish(EventType.STATE_CHANGED, key="docs", state="s1")

        docs.assert_called_once()
        self.assertEqual(docs.call_args.kwargs["state"], "s1")
        self.assertEqual(everything.call_count, 2)

    def test_key_scoped_listeners_run_after_type_wide_ones(self):
        order = []
        self.bus.subscribe_key(EventType.STATE_CHANGED, "docs", lambda **event: order.append("scoped"))
        self.bus.subscribe(EventType.STATE_CHANGED, lambda **event: order.append("wide"))
        self.bus.publish(EventType.STATE_CHANGED, key="docs")
        self.assertEqual(order, ["wide", "scoped"])

    def test_event_without_key_skips_scoped_listeners(self):
        scoped = Mock()
        self.bus.subscribe_key(EventType.FETCH_STARTED, "docs", scoped)
        self.bus.publish(EventType.FETCH_STARTED, page=0)
        scoped.assert_not_called()

    def test_unsubscribe_key(self):
        callback = Mock()
        self.bus.subscribe_key(EventType.STATE_CHANGED, "docs", callback)
        self.bus.subscribe_key(EventType.STATE_CHANGED, "herd", callback)
        self.assertEqual(self.bus.get_subscriber_count(EventType.STATE_CHANGED), 2)
        self.assertEqual(self.bus.get_event_types(), {EventType.STATE_CHANGED})

        self.assertTrue(self.bus.unsubscribe_key(EventType.STATE_CHANGED, "docs", callback))
        self.assertFalse(self.bus.unsubscribe_key(EventType.STATE_CHANGED, "docs", callback))
        self.assertFalse(self.bus.unsubscribe(EventType.STATE_CHANGED, callback))

        self.bus.publish(EventType.STATE_CHANGED, key="docs")
        callback.assert_not_called()
        self.assertEqual(self.bus.get_subscriber_count(EventType.STATE_CHANGED), 1)

    def test_clear_all_subscriptions(self):
        self.bus.subscribe(EventType.FETCH_STARTED, Mock())
        self.bus.subscribe(EventType.KEY_RELEASED, Mock())
        self.bus.subscribe_key(EventType.STATE_CHANGED, "docs", Mock())
        self.bus.clear_all_subscriptions()
        self.assertEqual(self.bus.get_event_types(), set())


if __name__ == "__main__":
    unittest.main()
