"""Foreground state thread and background worker pool."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

T = TypeVar("T")

log = logging.getLogger(__name__)


class Dispatcher:
    """Two execution contexts: one state thread and a background pool.

    The state thread is the single consumer of every state mutation, so
    mutations apply one at a time in submission order. Filesystem-heavy
    work runs on the background pool and marshals its results back with
    :meth:`post` or :meth:`call`.

    :param background_workers: Size of the background pool.
    :param name: Prefix for thread names.
    """

    def __init__(self, background_workers: int = 1, *, name: str = "dirkeeper") -> None:
        self._state_ident: int | None = None
        self._state = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"{name}-state", initializer=self._bind_state_thread
        )
        self._background = ThreadPoolExecutor(max_workers=background_workers, thread_name_prefix=f"{name}-bulk")
        self._closed = False

    def _bind_state_thread(self) -> None:
        self._state_ident = threading.get_ident()

    def __repr__(self) -> str:
        return f"Dispatcher(closed={self._closed})"

    def on_state_thread(self) -> bool:
        """Whether the caller is running on the state thread."""
        return threading.get_ident() == self._state_ident

    def call(self, fn: Callable[..., T], *args: Any) -> T:
        """Run ``fn`` on the state thread and wait for its result.

        Runs inline when already on the state thread.
        """
        if self.on_state_thread():
            return fn(*args)
        return self._state.submit(fn, *args).result()

    def post(self, fn: Callable[..., Any], *args: Any) -> Future[Any]:
        """Queue ``fn`` on the state thread without waiting."""
        return self._state.submit(fn, *args)

    def run_in_background(self, fn: Callable[..., T], *args: Any) -> Future[T]:
        """Start ``fn`` on the background pool and return immediately."""
        return self._background.submit(fn, *args)

    def close(self) -> None:
        """Finish queued background work, then stop both contexts.

        :raises RuntimeError: If called from the state thread.
        """
        if self._closed:
            return
        if self.on_state_thread():
            raise RuntimeError("Dispatcher cannot be closed from its own state thread")
        self._closed = True
        self._background.shutdown(wait=True)
        self._state.shutdown(wait=True)
        log.debug("Dispatcher closed")

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
