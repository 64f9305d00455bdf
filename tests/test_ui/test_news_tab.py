# tests/test_ui/test_news_tab.py
import os
import sys
import unittest
from unittest.mock import patch

# --- Adjust sys.path to find newsfeed ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(os.path.dirname(current_dir))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
# ------------------------------------

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from newsfeed.models.news import Article, FetchErrorKind, FetchFailure, FetchSuccess
from newsfeed.ui.controllers.news_controller import NewsController
from newsfeed.ui.views.tabs.news_tab import NewsTab

_app = QApplication.instance() or QApplication([])


class QueuedNewsService:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)

    async def fetch(self, timeout: float):
        return self.outcomes.pop(0)


class RecordingThreadPool:
    def __init__(self):
        self.runners = []

    def start(self, runner):
        self.runners.append(runner)

    def waitForDone(self, msecs: int = -1) -> bool:
        return True


def make_article(title: str) -> Article:
    return Article(
        source={"name": "Test Wire"},
        title=title,
        url=f"https://example.com/{title}",
        published_at="2024-05-01T10:00:00Z",
    )


class TestNewsTab(unittest.TestCase):
    """The list page reflects controller progress and surfaces failures."""

    def _make_tab(self, *outcomes) -> NewsTab:
        controller = NewsController(QueuedNewsService(*outcomes))
        self.pool = RecordingThreadPool()
        controller._thread_pool = self.pool
        self.tab = NewsTab(controller)
        return self.tab

    def tearDown(self):
        self.tab.perform_cleanup()
        self.tab.deleteLater()

    def test_initial_load_is_requested_on_creation(self):
        tab = self._make_tab(FetchSuccess(()))

        self.assertEqual(len(self.pool.runners), 1)
        self.assertFalse(tab.refresh_button.isEnabled())
        self.assertEqual(tab.status_label.text(), "Refreshing...")

    def test_success_updates_status_and_list(self):
        tab = self._make_tab(FetchSuccess((make_article("A"), make_article("B"))))

        self.pool.runners[0].run()

        self.assertTrue(tab.refresh_button.isEnabled())
        self.assertEqual(tab.status_label.text(), "2 headlines")
        self.assertEqual(tab.news_list.model().rowCount(), 2)

    def test_failure_shows_message_box(self):
        tab = self._make_tab(FetchFailure(FetchErrorKind.TRANSPORT, "offline"))

        with patch("newsfeed.ui.views.tabs.news_tab.QMessageBox.critical") as critical:
            self.pool.runners[0].run()

        critical.assert_called_once()
        self.assertIn("offline", critical.call_args[0][2])
        self.assertEqual(tab.status_label.text(), "Refresh failed")
        self.assertTrue(tab.refresh_button.isEnabled())

    def test_refresh_button_starts_a_new_fetch(self):
        tab = self._make_tab(FetchSuccess(()), FetchSuccess(()))
        self.pool.runners[0].run()

        tab.refresh_button.click()

        self.assertEqual(len(self.pool.runners), 2)


if __name__ == "__main__":
    unittest.main()
