"""Running callables on background threads, a thread pool or a game thread queue."""

from __future__ import annotations

import enum
import logging
import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)

_pool: ThreadPoolExecutor | None = None
_pool_lock = threading.Lock()


def _thread_pool() -> ThreadPoolExecutor:
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadPoolExecutor(thread_name_prefix="cuutils-pool")
        return _pool


def _run_into(future: Future, func: Callable[[], Any]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = func()
    except BaseException as exc:  # noqa: BLE001 - delivered through the future
        future.set_exception(exc)
    else:
        future.set_result(result)


class CallbackType(enum.Enum):
    """Where a callback is run."""

    GAME_THREAD = 0
    BACKGROUND_THREADPOOL = 1
    BACKGROUND_TASKGRAPH = 2


class GameThreadDispatcher:
    """Queue of work for the thread that created it, run by :meth:`pump`."""

    def __init__(self) -> None:
        self._owner = threading.get_ident()
        self._queue: queue.SimpleQueue[tuple[Future, Callable[[], Any]]] = queue.SimpleQueue()

    def post(self, func: Callable[[], Any]) -> Future:
        """Queue ``func``; the returned future completes once it has run."""
        future: Future = Future()
        self._queue.put((future, func))
        return future

    def pump(self) -> int:
        """Run everything queued so far; return how many callables ran."""
        ran = 0
        while True:
            try:
                future, func = self._queue.get_nowait()
            except queue.Empty:
                return ran
            _run_into(future, func)
            ran += 1

    def is_game_thread(self) -> bool:
        return threading.get_ident() == self._owner


class LatentAction:
    """A pending completion that is marked done by :meth:`call`."""

    def __init__(
        self,
        uuid: int = 0,
        on_complete: Callable[[], Any] | None = None,
        on_cancel: Callable[[], Any] | None = None,
    ) -> None:
        self.uuid = uuid
        self.on_complete = on_complete
        self.on_cancel = on_cancel
        self._called = threading.Event()
        self._finished = False

    @property
    def called(self) -> bool:
        return self._called.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until :meth:`call` has happened or ``timeout`` passes."""
        return self._called.wait(timeout)

    def call(self) -> None:
        self._called.set()

    def update(self) -> bool:
        """Fire ``on_complete`` once after the action was called; return whether it is done."""
        if self.called and not self._finished:
            self._finished = True
            if self.on_complete is not None:
                self.on_complete()
        return self._finished

    def cancel(self) -> None:
        """Run the cancel callback, or report the cancellation when there is none."""
        if self.on_cancel is not None:
            self.on_cancel()
        else:
            logger.info("%d graph callback cancelled.", self.uuid)

    def description(self) -> str:
        return "Done." if self.called else "Pending."


def run_on_background_thread(func: Callable[[], Any]) -> Future:
    """Run ``func`` on a new thread of its own."""
    future: Future = Future()
    threading.Thread(target=_run_into, args=(future, func), daemon=True).start()
    return future


def run_on_thread_pool(func: Callable[[], Any]) -> Future:
    """Run ``func`` on the shared thread pool."""
    return _thread_pool().submit(func)


def set_timeout(
    on_done: Callable[[], Any],
    duration: float,
    dispatcher: GameThreadDispatcher | None = None,
) -> Future:
    """Call ``on_done`` after ``duration`` seconds.

    With a dispatcher the call is queued on it; otherwise it runs on the
    background thread that waited.
    """

    def wait_then_call() -> Any:
        time.sleep(duration)
        if dispatcher is not None:
            return dispatcher.post(on_done)
        return on_done()

    return run_on_background_thread(wait_then_call)


def call_function_on_thread(
    target: object,
    function_name: str,
    thread_type: CallbackType,
    dispatcher: GameThreadDispatcher | None = None,
    latent_action: LatentAction | None = None,
) -> Future | None:
    """Call ``target.function_name()`` on the thread kind given.

    Returns a future for the call, or None when the target or function is
    missing (the latent action, if any, is still marked called).
    """
    if target is None:
        logger.warning("CallFunctionOnThread: Target not found for '%s'", function_name)
        if latent_action is not None:
            latent_action.call()
        return None
    function = getattr(target, function_name, None)
    if not callable(function):
        logger.warning("CallFunctionOnThread: Function not found '%s'", function_name)
        if latent_action is not None:
            latent_action.call()
        return None

    def invoke() -> Any:
        result = function()
        if latent_action is not None:
            latent_action.call()
        return result

    thread_type = CallbackType(thread_type)
    if thread_type is CallbackType.GAME_THREAD:
        if dispatcher is None or dispatcher.is_game_thread():
            future: Future = Future()
            _run_into(future, invoke)
            return future
        return dispatcher.post(invoke)
    return run_on_thread_pool(invoke)