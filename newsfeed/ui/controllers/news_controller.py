# newsfeed/ui/controllers/news_controller.py

"""
NewsController orchestrates the headline list shown in the News page.

Core responsibilities:
- Trigger NewsService fetches on a QThreadPool worker and receive the outcome on the GUI thread.
- Own the ArticleListModel, replacing its content wholesale on every applied success.
- Track the Idle/Loading/Loaded/LoadFailed state and the refresh indicator.
- Discard results of fetches that were overtaken by a newer request (RequestTracker).
- Route row selection and row sharing to the detail viewer and share collaborator via signals.
- Emit error_occurred signal with a title and message to report failures.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from PySide6.QtCore import QObject, Signal, Slot, QThreadPool, QUrl

from newsfeed.models.news import Article, FetchFailure, FetchOutcome, FetchSuccess
from newsfeed.services.image_service import ImageService
from newsfeed.services.news_service import NewsService
from newsfeed.ui.models.article_list_model import ArticleListModel
from newsfeed.ui.workers.async_runner import AsyncTaskRunner

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


class RequestTracker:
    """Helper class to number fetch requests and decide which results still count."""

    def __init__(self):
        self.latest_issued = 0
        self.latest_applied = 0
        self.in_flight = 0

    def begin(self) -> int:
        """Register a new request and return its sequence number."""
        self.latest_issued += 1
        self.in_flight += 1
        return self.latest_issued

    def complete(self, seq: int) -> bool:
        """
        Mark a request as resolved.

        Returns:
            True if its result must be applied, i.e. no higher-numbered result
            has been applied yet.
        """
        self.in_flight = max(0, self.in_flight - 1)
        if seq <= self.latest_applied:
            return False
        self.latest_applied = seq
        return True

    def is_latest(self, seq: int) -> bool:
        return seq == self.latest_issued


class NewsController(QObject):
    """Controller for the News page"""

    # Signals to update the View
    news_data_updated = Signal(int)  # number of articles now shown
    state_changed = Signal(str)  # LoadState value
    refresh_started = Signal()
    refresh_finished = Signal()
    error_occurred = Signal(str, str)  # title, message
    article_open_requested = Signal(str)  # url
    article_share_requested = Signal(str)  # url

    def __init__(
        self,
        news_service: NewsService,
        image_service: Optional[ImageService] = None,
        fetch_timeout: float = 7.0,
        parent=None,
    ):
        super().__init__(parent)
        self._news_service = news_service
        self._fetch_timeout = fetch_timeout
        self._state = LoadState.IDLE
        self._tracker = RequestTracker()
        self._runners: Dict[int, AsyncTaskRunner] = {}
        self._thread_pool = QThreadPool.globalInstance()

        # --- Model Setup ---
        self._list_model = ArticleListModel(image_service, parent=self)

    # --- Accessors ---
    @property
    def list_model(self) -> ArticleListModel:
        """Provides access to the model for the view."""
        return self._list_model

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def articles(self) -> Tuple[Article, ...]:
        return self._list_model.articles

    @property
    def is_refreshing(self) -> bool:
        return self._tracker.in_flight > 0

    def _set_state(self, state: LoadState):
        if state != self._state:
            logger.debug(f"News list state: {self._state.value} -> {state.value}")
            self._state = state
            self.state_changed.emit(state.value)

    # --- Fetching ---
    def load_initial_data(self):
        """Fetch the first page of headlines when the view is created."""
        if self._state == LoadState.IDLE:
            self.refresh_news()

    def refresh_news(self) -> int:
        """
        Start a new headlines fetch. Overlapping calls are independent requests;
        only the newest result is kept.

        Returns:
            The sequence number assigned to this request.
        """
        seq = self._tracker.begin()
        logger.info(f"Refreshing headlines (request #{seq})")
        self._set_state(LoadState.LOADING)
        self.refresh_started.emit()

        runner = AsyncTaskRunner(seq, self._news_service.fetch, self._fetch_timeout)
        runner.setAutoDelete(True)
        runner.signals.finished.connect(self._on_fetch_finished)
        runner.signals.error.connect(self._on_fetch_error)
        self._runners[seq] = runner
        self._thread_pool.start(runner)
        return seq

    @Slot(object, object)
    def _on_fetch_finished(self, seq: int, outcome: FetchOutcome):
        self._runners.pop(seq, None)
        self.apply_outcome(seq, outcome)

    @Slot(object, object)
    def _on_fetch_error(self, seq: int, error: Exception):
        # Raised by the fetch or by the runner itself; settles the request like any failure
        self._runners.pop(seq, None)
        self.apply_outcome(seq, error)

    def apply_outcome(self, seq: int, outcome: Union[FetchOutcome, Exception]) -> bool:
        """
        Apply the outcome of request seq to the presenter state.

        Args:
            seq: Sequence number returned by refresh_news().
            outcome: FetchSuccess, FetchFailure, or the exception the fetch raised.

        Returns:
            False if the result was stale and discarded.
        """
        if not self._tracker.complete(seq):
            logger.info(f"Discarding result of superseded request #{seq}")
            self._finish_if_idle()
            return False

        if isinstance(outcome, FetchSuccess):
            self._list_model.set_articles(outcome.articles)
            self.news_data_updated.emit(len(outcome.articles))
            if self._tracker.is_latest(seq):
                self._set_state(LoadState.LOADED)
        elif isinstance(outcome, FetchFailure):
            logger.warning(
                f"Request #{seq} failed ({outcome.kind.value}), keeping {len(self.articles)} articles"
            )
            if self._tracker.is_latest(seq):
                self._set_state(LoadState.LOAD_FAILED)
            self.error_occurred.emit(
                "Error", f"Failed to refresh news: {outcome.user_message}"
            )
        else:
            if self._tracker.is_latest(seq):
                self._set_state(LoadState.LOAD_FAILED)
            self._handle_error("headline refresh", outcome)

        self._finish_if_idle()
        return True

    def _finish_if_idle(self):
        if self._tracker.in_flight == 0:
            self.refresh_finished.emit()

    def _handle_error(self, operation: str, error: Exception) -> bool:
        """Centralized handler for unexpected exceptions."""
        logger.error(f"Error during {operation}: {error}", exc_info=error)
        self.error_occurred.emit(f"{operation.title()} Error", str(error))
        return False

    # --- Row actions ---
    def _article_url(self, row: int) -> Optional[str]:
        article = self._list_model.article_at(row)
        if article is None:
            logger.warning(f"No article at row {row} ({len(self.articles)} rows)")
            return None
        url = QUrl(article.url, QUrl.ParsingMode.StrictMode)
        if not url.isValid() or url.isRelative():
            logger.warning(f"Ignoring article with unusable URL: {article.url!r}")
            return None
        return article.url

    def open_article(self, row: int) -> Optional[str]:
        """Hand the URL of the article at row to the detail viewer."""
        url = self._article_url(row)
        if url:
            logger.info(f"Opening article: {url}")
            self.article_open_requested.emit(url)
        return url

    def share_article(self, row: int) -> Optional[str]:
        """Hand the URL of the article at row to the share collaborator."""
        url = self._article_url(row)
        if url:
            self.article_share_requested.emit(url)
        return url

    # --- Cleanup ---
    def cleanup(self):
        """Silence outstanding work and wait briefly for worker threads."""
        logger.info("NewsController cleanup initiated.")
        for runner in self._runners.values():
            runner.cancel()
        self._runners.clear()
        self._list_model.cancel_pending()
        if not self._thread_pool.waitForDone(int((self._fetch_timeout + 1) * 1000)):
            logger.warning("Background requests still running at shutdown")
        logger.info("NewsController cleanup finished.")
