#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Article detail page: an embedded browser showing a single article URL.
"""

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel
from PySide6.QtCore import Signal, Slot, QUrl
from PySide6.QtWebEngineWidgets import QWebEngineView

logger = logging.getLogger(__name__)


class ArticleWebView(QWidget):
    """Detail page rendering an article inside a QWebEngineView."""

    back_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        toolbar = QHBoxLayout()
        self.back_button = QPushButton("< News")
        self.back_button.clicked.connect(self._handle_back)
        toolbar.addWidget(self.back_button)

        self.url_label = QLabel("")
        self.url_label.setObjectName("ArticleUrlLabel")
        self.url_label.setStyleSheet("color: #666;")
        toolbar.addWidget(self.url_label, 1)
        layout.addLayout(toolbar)

        self.browser = QWebEngineView(self)
        self.browser.loadFinished.connect(self._on_load_finished)
        layout.addWidget(self.browser, 1)

    def show_article(self, url: str):
        """Load the given absolute URL."""
        logger.info(f"Rendering article: {url}")
        self.url_label.setText(url)
        self.browser.setUrl(QUrl(url))

    @Slot(bool)
    def _on_load_finished(self, ok: bool):
        if not ok:
            logger.warning(f"Article page failed to load: {self.browser.url().toString()}")

    def _handle_back(self):
        # Unload the page so its media stops playing
        self.browser.setUrl(QUrl("about:blank"))
        self.back_requested.emit()
