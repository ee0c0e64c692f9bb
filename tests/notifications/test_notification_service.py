import concurrent.futures
import unittest

from notifications import NotificationContent, NotificationError, NotificationService
from pomodoro import PomodoroEngine, SessionCompleted


class _ImmediateExecutor(concurrent.futures.Executor):
    def submit(self, fn, *args, **kwargs):
        future: concurrent.futures.Future = concurrent.futures.Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as error:
            future.set_exception(error)
        return future


class _BannerStub:
    def __init__(self, error: Exception | None = None):
        self.shown: list[NotificationContent] = []
        self._error = error

    def show(self, content: NotificationContent) -> None:
        self.shown.append(content)
        if self._error is not None:
            raise self._error


class _ChimeStub:
    def __init__(self, error: Exception | None = None):
        self.plays = 0
        self._error = error

    def play(self, blocking: bool = True) -> None:
        self.plays += 1
        if self._error is not None:
            raise self._error


class NotificationServiceTests(unittest.TestCase):
    def test_notify_shows_banner_and_plays_chime(self) -> None:
        banner = _BannerStub()
        chime = _ChimeStub()
        service = NotificationService(
            banner=banner,
            chime=chime,
            executor=_ImmediateExecutor(),
        )

        service.notify(SessionCompleted("work", "short_break", 1))

        self.assertEqual(
            [NotificationContent("Work Session Over!", "Time for a short break (5 min).")],
            banner.shown,
        )
        self.assertEqual(1, chime.plays)

    def test_banner_failure_still_plays_chime(self) -> None:
        chime = _ChimeStub()
        service = NotificationService(
            banner=_BannerStub(error=NotificationError("denied")),
            chime=chime,
            executor=_ImmediateExecutor(),
        )

        with self.assertLogs("notifications", level="WARNING"):
            service.notify(SessionCompleted("short_break", "work", 1))

        self.assertEqual(1, chime.plays)

    def test_unexpected_worker_error_is_logged(self) -> None:
        service = NotificationService(
            chime=_ChimeStub(error=RuntimeError("driver crash")),
            executor=_ImmediateExecutor(),
        )

        with self.assertLogs("notifications", level="ERROR"):
            service.notify(SessionCompleted("long_break", "work", 4))

    def test_notify_after_close_is_dropped(self) -> None:
        banner = _BannerStub()
        service = NotificationService(banner=banner)
        service.close()

        with self.assertLogs("notifications", level="WARNING"):
            service.notify(SessionCompleted("work", "short_break", 1))

        self.assertEqual([], banner.shown)

    def test_engine_skip_delivers_one_notification(self) -> None:
        banner = _BannerStub(error=NotificationError("no backend"))
        service = NotificationService(banner=banner, executor=_ImmediateExecutor())
        engine = PomodoroEngine(notifiers=[service])

        with self.assertLogs("notifications", level="WARNING"):
            result = engine.skip()

        self.assertEqual(1, len(banner.shown))
        self.assertEqual("Work Session Over!", banner.shown[0].title)
        self.assertEqual("short_break", result.snapshot.current_session)
        self.assertEqual(300, result.snapshot.remaining_seconds)

    def test_worker_thread_delivers_in_background(self) -> None:
        banner = _BannerStub()
        service = NotificationService(banner=banner)

        service.notify(SessionCompleted("work", "long_break", 4))
        service._executor.shutdown(wait=True)

        self.assertEqual("Time for a long break (15 min).", banner.shown[0].body)


if __name__ == "__main__":
    unittest.main()
