import gc
import threading
import time
import unittest

from pomodoro import PomodoroEngine, Ticker

_INTERVAL = 0.01


class _Counter:
    def __init__(self, stop_after: int = 0):
        self.count = 0
        self.generations: list[int] = []
        self.reached = threading.Event()
        self._stop_after = stop_after

    def tick(self, generation: int) -> None:
        self.generations.append(generation)
        self.count += 1
        if self._stop_after and self.count >= self._stop_after:
            self.reached.set()


class _HeldFirstTickEngine(PomodoroEngine):
    """Engine whose first tick stalls until the test releases it."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.first_tick_waiting = threading.Event()
        self.release_first_tick = threading.Event()

    def on_tick(self, generation=None) -> None:
        if not self.first_tick_waiting.is_set():
            self.first_tick_waiting.set()
            self.release_first_tick.wait(2.0)
        super().on_tick(generation)


class TickerTests(unittest.TestCase):
    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            Ticker(interval_seconds=0)

    def test_armed_ticker_invokes_callback_until_disarmed(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        counter = _Counter(stop_after=3)

        ticker.arm(counter.tick)
        self.assertTrue(counter.reached.wait(2.0))
        ticker.disarm()
        self.assertFalse(ticker.is_armed)

        time.sleep(_INTERVAL * 5)
        settled = counter.count
        time.sleep(_INTERVAL * 10)
        self.assertEqual(settled, counter.count)

    def test_arm_is_idempotent_while_armed(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        counter = _Counter()
        first_generation = ticker.arm(counter.tick)
        first_thread = ticker._thread

        second_generation = ticker.arm(counter.tick)

        self.assertIs(first_thread, ticker._thread)
        self.assertEqual(first_generation, second_generation)
        ticker.disarm()

    def test_disarm_from_inside_callback_does_not_deadlock(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        done = threading.Event()

        def tick_once(generation: int) -> None:
            ticker.disarm()
            done.set()

        ticker.arm(tick_once)

        self.assertTrue(done.wait(2.0))
        self.assertFalse(ticker.is_armed)

    def test_callback_errors_are_logged_and_ticking_continues(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        calls = []
        second_call = threading.Event()

        def flaky(generation: int) -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            second_call.set()

        with self.assertLogs("ticker", level="ERROR"):
            ticker.arm(flaky)
            self.assertTrue(second_call.wait(2.0))
        ticker.disarm()

    def test_rearming_passes_a_new_generation(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        first = _Counter(stop_after=1)
        second = _Counter(stop_after=1)

        first_generation = ticker.arm(first.tick)
        self.assertTrue(first.reached.wait(2.0))
        ticker.disarm()
        second_generation = ticker.arm(second.tick)
        self.assertTrue(second.reached.wait(2.0))
        ticker.disarm()

        self.assertNotEqual(first_generation, second_generation)
        self.assertEqual({second_generation}, set(second.generations))

    def test_ticker_does_not_keep_engine_alive(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        engine = PomodoroEngine(ticker=ticker)
        engine.start()
        thread = ticker._thread

        del engine
        gc.collect()

        thread.join(2.0)
        self.assertFalse(thread.is_alive())

    def test_tick_in_flight_across_pause_and_start_is_dropped(self) -> None:
        ticker = Ticker(interval_seconds=0.3)
        engine = _HeldFirstTickEngine(ticker=ticker)

        engine.start()
        self.assertTrue(engine.first_tick_waiting.wait(2.0))
        engine.pause()
        engine.start()
        engine.release_first_tick.set()
        time.sleep(0.05)

        self.assertEqual(1500, engine.snapshot().remaining_seconds)
        engine.pause()

    def test_drives_engine_countdown(self) -> None:
        ticker = Ticker(interval_seconds=_INTERVAL)
        engine = PomodoroEngine(ticker=ticker)
        reached = threading.Event()

        def watch(update) -> None:
            if update.snapshot.remaining_seconds <= 1495:
                engine.pause()
                reached.set()

        engine.subscribe(watch)
        engine.start()

        self.assertTrue(reached.wait(2.0))
        self.assertEqual(1495, engine.snapshot().remaining_seconds)
        self.assertFalse(ticker.is_armed)


if __name__ == "__main__":
    unittest.main()
