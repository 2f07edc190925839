import threading
import time
import unittest

from roomcast_announce.ShutdownEvent import ShutdownEvent


class TestShutdownEvent(unittest.TestCase):
    def setUp(self):
        self.event = ShutdownEvent()

    def test_initial_state(self):
        self.assertFalse(self.event.is_set())

    def test_wait_times_out(self):
        start = time.monotonic()

        signalled = self.event.wait_until(start + 0.05)

        self.assertFalse(signalled)
        self.assertGreaterEqual(time.monotonic() - start, 0.04)

    def test_deadline_in_the_past(self):
        start = time.monotonic()

        self.assertFalse(self.event.wait_until(start - 10))
        self.assertLess(time.monotonic() - start, 0.5)

    def test_set_before_wait(self):
        self.event.set()
        start = time.monotonic()

        self.assertTrue(self.event.wait_until(start + 60))
        self.assertLess(time.monotonic() - start, 0.5)

    def test_set_wakes_waiter(self):
        results = []

        def waiter():
            results.append(self.event.wait_until(time.monotonic() + 60))

        thread = threading.Thread(target=waiter)
        start = time.monotonic()
        thread.start()
        time.sleep(0.05)
        self.event.set()
        thread.join(timeout=2.0)

        self.assertFalse(thread.is_alive())
        self.assertEqual(results, [True])
        self.assertLess(time.monotonic() - start, 2.0)

    def test_stays_set_until_reset(self):
        self.event.set()
        self.assertTrue(self.event.wait_until(time.monotonic()))
        self.assertTrue(self.event.is_set())

        self.event.reset()

        self.assertFalse(self.event.is_set())
        self.assertFalse(self.event.wait_until(time.monotonic()))


if __name__ == "__main__":
    unittest.main()
