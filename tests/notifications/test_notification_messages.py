import unittest

from notifications import notification_for
from pomodoro import SessionCompleted


class NotificationMessagesTests(unittest.TestCase):
    def test_work_before_short_break(self) -> None:
        content = notification_for(SessionCompleted("work", "short_break", 1))

        self.assertEqual("Work Session Over!", content.title)
        self.assertEqual("Time for a short break (5 min).", content.body)

    def test_work_before_long_break(self) -> None:
        content = notification_for(SessionCompleted("work", "long_break", 4))

        self.assertEqual("Work Session Over!", content.title)
        self.assertEqual("Time for a long break (15 min).", content.body)

    def test_short_break_over(self) -> None:
        content = notification_for(SessionCompleted("short_break", "work", 1))

        self.assertEqual("Break Over!", content.title)
        self.assertEqual("Time to get back to focus (25 min).", content.body)

    def test_long_break_over(self) -> None:
        content = notification_for(SessionCompleted("long_break", "work", 4))

        self.assertEqual("Long Break Over!", content.title)
        self.assertEqual("Ready for the next focus session? (25 min).", content.body)


if __name__ == "__main__":
    unittest.main()
