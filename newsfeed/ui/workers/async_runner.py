# newsfeed/ui/workers/async_runner.py
# -*- coding: utf-8 -*-

"""
Runs one coroutine on a QThreadPool worker and reports back through Qt signals.

Each runner carries a tag chosen by its owner (a fetch sequence number, or a
thumbnail's (generation, row) pair). Both the result and the failure signal
carry that tag, so the owner can settle the exact request that ended.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable

from PySide6.QtCore import QRunnable, QObject, Signal

logger = logging.getLogger(__name__)


class AsyncTaskRunner(QRunnable):
    """Class for running one tagged asynchronous task in QThreadPool"""

    class Signals(QObject):
        """Nested class for emitting signals"""

        finished = Signal(object, object)  # tag, result
        error = Signal(object, object)  # tag, exception

    def __init__(
        self,
        tag: Hashable,
        coro: Callable[..., Awaitable[Any]],
        *args,
        **kwargs,
    ):
        """Initialize the async task runner
        Args:
            tag: Value identifying this request to its owner
            coro: Coroutine function to run (callable)
            *args: Positional arguments to pass to the coroutine function
            **kwargs: Keyword arguments to pass to the coroutine function

        Connect the signals to methods of a QObject living in the GUI thread so that
        Qt queues the delivery there.
        """
        super().__init__()
        self.tag = tag
        self.coro_func = coro
        self.args = args
        self.kwargs = kwargs
        self.signals = self.Signals()
        self.is_cancelled = False

    def run(self):
        """Run the coroutine on a private event loop and emit exactly one signal"""
        loop = None
        try:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            result = loop.run_until_complete(self.coro_func(*self.args, **self.kwargs))
        except Exception as e:
            if not self.is_cancelled:
                logger.error(f"Task {self.tag!r} failed: {e}", exc_info=True)
                self.signals.error.emit(self.tag, e)
        else:
            if not self.is_cancelled:
                self.signals.finished.emit(self.tag, result)
        finally:
            if loop:
                self._close_loop(loop)

    def _close_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        try:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()
        except Exception as close_err:
            logger.error(f"Error closing event loop of task {self.tag!r}: {close_err}", exc_info=True)
        finally:
            asyncio.set_event_loop(None)

    def cancel(self):
        """Suppress both signals; the coroutine itself still runs to completion."""
        self.is_cancelled = True
