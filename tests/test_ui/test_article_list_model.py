# tests/test_ui/test_article_list_model.py
import os
import sys
import unittest
from typing import List, Optional

# --- Adjust sys.path to find newsfeed ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(os.path.dirname(current_dir))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
# ------------------------------------

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QBuffer, QIODevice, Qt
from PySide6.QtGui import QColor, QPixmap
from PySide6.QtWidgets import QApplication

from newsfeed.models.news import Article
from newsfeed.ui.models.article_list_model import (
    ArticleListModel,
    ArticleRole,
    UrlRole,
)

# Ensure a QApplication instance exists for pixmaps and style icons
_app = QApplication.instance() or QApplication([])


def make_article(title: str, url: str, image_url: Optional[str] = None, **extra) -> Article:
    fields = dict(
        source={"id": None, "name": "Test Wire"},
        title=title,
        url=url,
        image_url=image_url,
        published_at="2024-05-01T10:00:00Z",
    )
    fields.update(extra)
    return Article(**fields)


def png_bytes() -> bytes:
    pixmap = QPixmap(8, 8)
    pixmap.fill(QColor("red"))
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    pixmap.save(buffer, "PNG")
    return bytes(buffer.data())


class FakeImageService:
    def __init__(self, data: Optional[bytes]):
        self.data = data
        self.requested: List[str] = []

    async def fetch_thumbnail(self, url):
        self.requested.append(url)
        return self.data


class RecordingThreadPool:
    def __init__(self):
        self.runners = []

    def start(self, runner):
        self.runners.append(runner)


class TestArticleListModel(unittest.TestCase):
    def setUp(self):
        self.images = FakeImageService(png_bytes())
        self.model = ArticleListModel(self.images)
        self.pool = RecordingThreadPool()
        self.model._thread_pool = self.pool
        self.changed_rows: List[int] = []
        self.model.dataChanged.connect(
            lambda top_left, bottom_right, roles=None: self.changed_rows.append(top_left.row())
        )

    def tearDown(self):
        self.model.cancel_pending()
        self.model.deleteLater()

    def _decoration(self, row: int):
        return self.model.data(self.model.index(row, 0), Qt.ItemDataRole.DecorationRole)

    def test_set_articles_replaces_rows_and_bumps_generation(self):
        self.assertEqual(self.model.rowCount(), 0)
        start = self.model.generation

        self.model.set_articles([make_article("A", "http://a"), make_article("B", "http://b")])
        self.assertEqual(self.model.rowCount(), 2)
        self.assertEqual(self.model.generation, start + 1)

        self.model.set_articles([])
        self.assertEqual(self.model.rowCount(), 0)
        self.assertEqual(self.model.generation, start + 2)

    def test_data_roles(self):
        article = make_article(
            "Headline", "https://example.com/1", author="Reporter", description="Summary"
        )
        self.model.set_articles([article])
        index = self.model.index(0, 0)

        self.assertEqual(self.model.data(index, Qt.ItemDataRole.DisplayRole), "Headline\nSummary")
        self.assertEqual(
            self.model.data(index, Qt.ItemDataRole.ToolTipRole),
            "Test Wire · Reporter · 2024-05-01T10:00:00Z",
        )
        self.assertIs(self.model.data(index, ArticleRole), article)
        self.assertEqual(self.model.data(index, UrlRole), "https://example.com/1")

    def test_display_without_description_is_title_only(self):
        self.model.set_articles([make_article("Headline", "http://a")])

        self.assertEqual(
            self.model.data(self.model.index(0, 0), Qt.ItemDataRole.DisplayRole), "Headline"
        )

    def test_article_at_out_of_range(self):
        self.model.set_articles([make_article("A", "http://a")])

        self.assertIsNone(self.model.article_at(1))
        self.assertIsNone(self.model.article_at(-1))

    def test_row_without_image_shows_placeholder_without_loading(self):
        self.model.set_articles([make_article("A", "http://a")])

        icon = self._decoration(0)

        self.assertEqual(icon.cacheKey(), self.model.placeholder_icon().cacheKey())
        self.assertEqual(self.pool.runners, [])

    def test_thumbnail_requested_once_per_row(self):
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])

        self._decoration(0)
        self._decoration(0)

        self.assertEqual(len(self.pool.runners), 1)

    def test_loaded_thumbnail_replaces_placeholder(self):
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        placeholder = self._decoration(0)

        self.pool.runners[0].run()

        icon = self._decoration(0)
        self.assertEqual(self.images.requested, ["http://a/img.png"])
        self.assertEqual(self.changed_rows, [0])
        self.assertFalse(icon.isNull())
        self.assertNotEqual(icon.cacheKey(), placeholder.cacheKey())

    def test_undecodable_image_keeps_placeholder(self):
        self.images.data = b"not an image"
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        self._decoration(0)

        self.pool.runners[0].run()

        self.assertEqual(self._decoration(0).cacheKey(), self.model.placeholder_icon().cacheKey())
        self.assertEqual(len(self.pool.runners), 1)

    def test_failed_thumbnail_load_settles_row(self):
        async def broken_fetch(url):
            raise RuntimeError("decoder exploded")

        self.images.fetch_thumbnail = broken_fetch
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        self._decoration(0)

        self.pool.runners[0].run()

        self.assertEqual(self.model._runners, {})
        self.assertEqual(self.changed_rows, [0])
        self.assertEqual(self._decoration(0).cacheKey(), self.model.placeholder_icon().cacheKey())
        # Settled rows are not requested again
        self.assertEqual(len(self.pool.runners), 1)

    def test_finished_load_releases_runner(self):
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        self._decoration(0)
        self.assertEqual(list(self.model._runners), [(self.model.generation, 0)])

        self.pool.runners[0].run()

        self.assertEqual(self.model._runners, {})

    def test_thumbnail_for_replaced_list_is_dropped(self):
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        self._decoration(0)
        stale_runner = self.pool.runners[0]

        self.model.set_articles([make_article("B", "http://b", "http://b/img.png")])
        stale_runner.run()

        self.assertEqual(self.changed_rows, [])
        # The new content requests its own thumbnail
        self._decoration(0)
        self.assertEqual(len(self.pool.runners), 2)

    def test_apply_thumbnail_checks_generation_and_row(self):
        self.model.set_articles([make_article("A", "http://a", "http://a/img.png")])
        generation = self.model.generation

        self.assertFalse(self.model.apply_thumbnail(generation - 1, 0, png_bytes()))
        self.assertFalse(self.model.apply_thumbnail(generation, 3, png_bytes()))
        self.assertTrue(self.model.apply_thumbnail(generation, 0, None))

    def test_model_without_image_service_never_loads(self):
        model = ArticleListModel()
        model._thread_pool = self.pool
        model.set_articles([make_article("A", "http://a", "http://a/img.png")])

        model.data(model.index(0, 0), Qt.ItemDataRole.DecorationRole)

        self.assertEqual(self.pool.runners, [])
        model.deleteLater()


if __name__ == "__main__":
    unittest.main()
