#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Main Window Interface Module
Stacks the headline list and the article detail page, like a navigation controller.
"""

import logging
from typing import Dict, Any

from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QStackedWidget,
    QStatusBar,
)
from PySide6.QtCore import Slot

from .tabs.news_tab import NewsTab
from .article_web_view import ArticleWebView
from ..controllers.main_controller import MainController

logger = logging.getLogger(__name__)

LIST_PAGE = 0
DETAIL_PAGE = 1


class MainWindow(QMainWindow):
    """Main Window Class"""

    def __init__(self, services: Dict[str, Any], fetch_timeout: float = 7.0):
        super().__init__()
        self.services = services
        # Initialize main controller, inject services to decouple UI and business logic
        self.main_controller = MainController(
            self.services["news_service"],
            self.services["image_service"],
            fetch_timeout=fetch_timeout,
        )

        self.setWindowTitle("News")
        self.setMinimumSize(480, 700)

        self._setup_ui()
        logger.info("Main window initialization completed")

    def _setup_ui(self):
        """Set up user interface using injected services"""
        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)
        self.setStatusBar(QStatusBar())

        # --- Create and Add Pages to Stack ---
        # Construction errors propagate to run_gui, which reports them and exits
        self.news_tab = NewsTab(self.main_controller.news_controller)
        self.article_view = ArticleWebView()

        self.stack.addWidget(self.news_tab)
        self.stack.addWidget(self.article_view)
        self.stack.setCurrentIndex(LIST_PAGE)

        # --- Connect Signals ---
        news_controller = self.main_controller.news_controller
        news_controller.article_open_requested.connect(self._show_article)
        news_controller.article_share_requested.connect(self._share_article)
        self.article_view.back_requested.connect(self._show_list)

        self._load_stylesheet()

    @Slot(str)
    def _show_article(self, url: str):
        """Push the detail page for the selected article."""
        self.article_view.show_article(url)
        self.stack.setCurrentIndex(DETAIL_PAGE)

    @Slot()
    def _show_list(self):
        """Pop back to the headline list."""
        self.stack.setCurrentIndex(LIST_PAGE)

    @Slot(str)
    def _share_article(self, url: str):
        """Desktop share sheet: put the link on the clipboard."""
        QApplication.clipboard().setText(url)
        self.statusBar().showMessage("Link copied to clipboard", 3000)
        logger.info(f"Shared article link: {url}")

    def closeEvent(self, event):
        """Handle window close event"""
        logger.info("Main window closing. Performing cleanup...")
        try:
            if not self.news_tab.perform_cleanup():
                logger.error(
                    "NewsTab cleanup reported issues. Application might not exit cleanly."
                )
        except Exception as cleanup_err:
            logger.error(f"Error during tab cleanup: {cleanup_err}", exc_info=True)

        logger.info("Cleanup finished. Accepting close event.")
        event.accept()

    def _load_stylesheet(self):
        """Load application stylesheet."""
        logger.debug("Loading application stylesheet...")
        self.setStyleSheet(
            """
            QWidget {
                font-family: 'Segoe UI', Arial, sans-serif;
                font-size: 14px;
                color: #333;
            }
            QListView {
                background-color: #f2f2f7;
                border: none;
            }
            QListView::item {
                background-color: white;
                border-radius: 12px;
                padding: 12px;
            }
            QListView::item:selected {
                background-color: #dbe9ff;
            }
            """
        )
