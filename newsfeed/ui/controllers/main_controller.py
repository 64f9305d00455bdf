# -*- coding: utf-8 -*-

"""
MainController owns the core services and sub-controllers for the UI.
"""

from typing import Optional

from PySide6.QtCore import QObject
from newsfeed.services.news_service import NewsService
from newsfeed.services.image_service import ImageService
from .news_controller import NewsController


class MainController(QObject):
    """
    MainController manages core services and sub-controllers for the UI.
    """

    def __init__(
        self,
        news_service: NewsService,
        image_service: Optional[ImageService] = None,
        fetch_timeout: float = 7.0,
        parent=None,
    ):
        super().__init__(parent)
        # Inject service instances
        self.news_service = news_service
        self.image_service = image_service

        # Create sub-controllers
        self.news_controller = NewsController(
            self.news_service, self.image_service, fetch_timeout=fetch_timeout
        )
