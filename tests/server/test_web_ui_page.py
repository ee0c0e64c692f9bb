import re
import unittest

from server import default_index_file


def _handler_line(page: str, event_type: str) -> str:
    match = re.search(rf'event\.type === "{event_type}"\).*', page)
    if match is None:
        raise AssertionError(f"no one-line handler for {event_type}")
    return match.group(0)


class BundledPageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.page = default_index_file().read_text(encoding="utf-8")

    def test_completion_text_has_its_own_element(self) -> None:
        self.assertIn('<div id="alert"></div>', self.page)

        handler = _handler_line(self.page, "session_completed")
        self.assertIn('$("alert")', handler)
        self.assertNotIn('$("status")', handler)

    def test_alert_is_cleared_only_when_a_session_runs(self) -> None:
        self.assertEqual(1, self.page.count('$("alert").textContent = ""'))
        self.assertIn(
            'if (event.state === "running") $("alert").textContent = "";',
            self.page,
        )

    def test_page_talks_to_the_websocket_endpoint(self) -> None:
        self.assertIn("/ws`", self.page)
        self.assertIn('type: "command"', self.page)


if __name__ == "__main__":
    unittest.main()
