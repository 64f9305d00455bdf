# newsfeed/ui/models/article_list_model.py
# -*- coding: utf-8 -*-

"""
ArticleListModel exposes the presenter's article list to a QListView.

Thumbnails are loaded lazily, the first time a row asks for its decoration.
Each load is tagged with the model generation that requested it; replacing the
article list bumps the generation, so a load that finishes after the list
changed is dropped instead of painting an image onto the wrong article.
"""

import logging
from typing import Dict, Optional, Sequence, Set, Tuple

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, QThreadPool, Slot
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtWidgets import QApplication, QStyle

from newsfeed.models.news import Article
from newsfeed.services.image_service import ImageService
from newsfeed.ui.workers.async_runner import AsyncTaskRunner

logger = logging.getLogger(__name__)

ArticleRole = Qt.ItemDataRole.UserRole + 1
UrlRole = Qt.ItemDataRole.UserRole + 2

THUMBNAIL_SIZE = 60


class ArticleListModel(QAbstractListModel):
    """List model over an immutable tuple of Article records."""

    def __init__(self, image_service: Optional[ImageService] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._image_service = image_service
        self._articles: Tuple[Article, ...] = ()
        self._generation = 0
        self._thumbnails: Dict[int, QIcon] = {}
        self._requested_rows: Set[int] = set()
        self._runners: Dict[Tuple[int, int], AsyncTaskRunner] = {}
        self._placeholder: Optional[QIcon] = None
        self._thread_pool = QThreadPool.globalInstance()

    # --- Content ---
    @property
    def generation(self) -> int:
        return self._generation

    @property
    def articles(self) -> Tuple[Article, ...]:
        return self._articles

    def set_articles(self, articles: Sequence[Article]) -> None:
        """Replace the whole list; every row re-renders."""
        self.beginResetModel()
        self._articles = tuple(articles)
        self._generation += 1
        self._thumbnails.clear()
        self._requested_rows.clear()
        self.endResetModel()
        logger.debug(
            f"Article model reset: {len(self._articles)} rows, generation {self._generation}"
        )

    def article_at(self, row: int) -> Optional[Article]:
        if 0 <= row < len(self._articles):
            return self._articles[row]
        return None

    # --- QAbstractListModel ---
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._articles)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        article = self.article_at(index.row())
        if article is None:
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            if article.description:
                return f"{article.title}\n{article.description}"
            return article.title
        if role == Qt.ItemDataRole.ToolTipRole:
            parts = [article.source_name]
            if article.author:
                parts.append(article.author)
            parts.append(article.published_at)
            return " · ".join(parts)
        if role == Qt.ItemDataRole.DecorationRole:
            return self._thumbnail_for(index.row(), article)
        if role == ArticleRole:
            return article
        if role == UrlRole:
            return article.url
        return None

    # --- Thumbnails ---
    def placeholder_icon(self) -> QIcon:
        if self._placeholder is None:
            self._placeholder = QApplication.style().standardIcon(
                QStyle.StandardPixmap.SP_FileIcon
            )
        return self._placeholder

    def _thumbnail_for(self, row: int, article: Article) -> QIcon:
        icon = self._thumbnails.get(row)
        if icon is not None:
            return icon
        if article.image_url and row not in self._requested_rows:
            self._requested_rows.add(row)
            self._start_thumbnail_load(row, article.image_url)
        return self.placeholder_icon()

    def _start_thumbnail_load(self, row: int, url: str) -> None:
        if self._image_service is None:
            return
        tag = (self._generation, row)
        runner = AsyncTaskRunner(tag, self._image_service.fetch_thumbnail, url)
        runner.setAutoDelete(True)
        runner.signals.finished.connect(self._on_thumbnail_loaded)
        runner.signals.error.connect(self._on_thumbnail_failed)
        self._runners[tag] = runner
        self._thread_pool.start(runner)

    @Slot(object, object)
    def _on_thumbnail_loaded(self, tag: Tuple[int, int], data: Optional[bytes]) -> None:
        self._runners.pop(tag, None)
        generation, row = tag
        self.apply_thumbnail(generation, row, data)

    @Slot(object, object)
    def _on_thumbnail_failed(self, tag: Tuple[int, int], error: Exception) -> None:
        self._runners.pop(tag, None)
        generation, row = tag
        logger.debug(f"Thumbnail load for row {row} raised: {error}")
        self.apply_thumbnail(generation, row, None)

    def apply_thumbnail(self, generation: int, row: int, data: Optional[bytes]) -> bool:
        """Store a finished load if it still belongs to the current content."""
        if generation != self._generation or row >= len(self._articles):
            logger.debug(
                f"Dropping stale thumbnail for row {row} (generation {generation}, current {self._generation})"
            )
            return False

        pixmap = QPixmap()
        if not data or not pixmap.loadFromData(data):
            # Keep the placeholder, but remember the row is settled
            self._thumbnails[row] = self.placeholder_icon()
        else:
            self._thumbnails[row] = QIcon(
                pixmap.scaled(
                    THUMBNAIL_SIZE,
                    THUMBNAIL_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        index = self.index(row, 0)
        self.dataChanged.emit(index, index, [Qt.ItemDataRole.DecorationRole])
        return True

    def cancel_pending(self) -> None:
        """Silence every outstanding thumbnail load (used on shutdown)."""
        for runner in self._runners.values():
            runner.cancel()
        self._runners.clear()
