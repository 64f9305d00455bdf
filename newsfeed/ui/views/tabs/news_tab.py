#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
News List Tab
Shows the current headlines and forwards refresh, open and share actions to its Controller.
"""

import logging

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QListView,
    QLabel,
    QMenu,
    QMessageBox,
    QAbstractItemView,
)
from PySide6.QtCore import Qt, Slot, QModelIndex, QSize
from PySide6.QtGui import QKeySequence, QShortcut

from newsfeed.ui.controllers.news_controller import NewsController, LoadState
from newsfeed.ui.models.article_list_model import THUMBNAIL_SIZE

logger = logging.getLogger(__name__)


class NewsTab(QWidget):
    """News List Tab (View Component)"""

    def __init__(self, controller: NewsController):
        super().__init__()
        self.controller = controller

        self._setup_ui()
        self._connect_signals()

        # Initial data load triggered via controller
        self.controller.load_initial_data()
        logger.info("NewsTab initialized and requested initial data load.")

    # --- UI Setup ---
    def _setup_ui(self):
        """Set up user interface widgets."""
        main_layout = QVBoxLayout(self)

        # --- Toolbar ---
        toolbar_layout = QHBoxLayout()
        main_layout.addLayout(toolbar_layout)

        self.title_label = QLabel("News")
        self.title_label.setObjectName("NewsTitleLabel")
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        toolbar_layout.addWidget(self.title_label)
        toolbar_layout.addStretch(1)

        self.status_label = QLabel("")
        self.status_label.setObjectName("NewsStatusLabel")
        toolbar_layout.addWidget(self.status_label)

        self.refresh_button = QPushButton("Refresh")
        self.refresh_button.setToolTip("Fetch the latest headlines (F5)")
        toolbar_layout.addWidget(self.refresh_button)

        # --- Headline list ---
        self.news_list = QListView()
        self.news_list.setModel(self.controller.list_model)
        self.news_list.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.news_list.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.news_list.setIconSize(QSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE))
        self.news_list.setWordWrap(True)
        self.news_list.setSpacing(4)
        self.news_list.setUniformItemSizes(False)
        self.news_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        main_layout.addWidget(self.news_list, 1)

        self.refresh_shortcut = QShortcut(QKeySequence.StandardKey.Refresh, self)

    # --- Signal Connections ---
    def _connect_signals(self):
        """Connect UI signals to controller actions and controller signals to view slots."""
        self.refresh_button.clicked.connect(self.controller.refresh_news)
        self.refresh_shortcut.activated.connect(self.controller.refresh_news)
        self.news_list.activated.connect(self._trigger_open_article)
        self.news_list.customContextMenuRequested.connect(self._show_context_menu)

        # Controller Signals -> View Update Slots
        self.controller.refresh_started.connect(self._show_refreshing)
        self.controller.refresh_finished.connect(self._end_refreshing)
        self.controller.news_data_updated.connect(self._update_list_view)
        self.controller.error_occurred.connect(self._show_error_message)

    # --- Internal Trigger Methods (Called by UI Signals) ---
    @Slot(QModelIndex)
    def _trigger_open_article(self, index: QModelIndex):
        if index.isValid():
            self.controller.open_article(index.row())

    # --- View Update Slots (Called by Controller Signals) ---
    @Slot()
    def _show_refreshing(self):
        self.refresh_button.setEnabled(False)
        self.status_label.setText("Refreshing...")

    @Slot()
    def _end_refreshing(self):
        self.refresh_button.setEnabled(True)
        if self.controller.state == LoadState.LOAD_FAILED:
            self.status_label.setText("Refresh failed")
        else:
            self.status_label.setText(f"{len(self.controller.articles)} headlines")

    @Slot(int)
    def _update_list_view(self, count: int):
        logger.debug(f"NewsTab: list now shows {count} headlines.")
        self.news_list.scrollToTop()

    @Slot(str, str)
    def _show_error_message(self, title: str, message: str):
        """Displays a dismissible error message box."""
        logger.warning(f"Displaying error: Title='{title}', Message='{message}'")
        QMessageBox.critical(self, title, message)

    # --- Context Menu ---
    def _show_context_menu(self, pos):
        """Shows the right-click menu for a headline row."""
        index = self.news_list.indexAt(pos)
        menu = QMenu(self)

        act_open = menu.addAction("Open")
        act_open.setEnabled(index.isValid())
        act_share = menu.addAction("Share Link")
        act_share.setEnabled(index.isValid())
        if index.isValid():
            row = index.row()
            act_open.triggered.connect(lambda: self.controller.open_article(row))
            act_share.triggered.connect(lambda: self.controller.share_article(row))

        menu.addSeparator()
        act_refresh = menu.addAction("Refresh List")
        act_refresh.triggered.connect(self.controller.refresh_news)

        menu.exec(self.news_list.viewport().mapToGlobal(pos))

    # --- Cleanup ---
    def perform_cleanup(self):
        """Ensure controller cleanup is called."""
        logger.info("NewsTab performing cleanup...")
        if self.controller:
            self.controller.cleanup()
        logger.info("NewsTab cleanup finished.")
        return True
