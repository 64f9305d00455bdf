# tests/test_ui/test_main_window.py
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

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtWidgets import QApplication

# QtWebEngine wants shared GL contexts before the application object exists
if QApplication.instance() is None:
    QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)

from newsfeed.ui.views.main_window import MainWindow

_app = QApplication.instance() or QApplication([])


class IdleNewsService:
    async def fetch(self, timeout: float):
        raise AssertionError("no fetch expected")


class TestMainWindowConstruction(unittest.TestCase):
    """Page construction failures surface to the caller instead of exiting."""

    def test_page_error_propagates(self):
        services = {"news_service": IdleNewsService(), "image_service": None}

        with patch(
            "newsfeed.ui.views.main_window.NewsTab",
            side_effect=RuntimeError("list page broken"),
        ), patch("newsfeed.ui.views.main_window.ArticleWebView") as web_view:
            with self.assertRaises(RuntimeError) as ctx:
                MainWindow(services)

        self.assertIn("list page broken", str(ctx.exception))
        web_view.assert_not_called()


if __name__ == "__main__":
    unittest.main()
