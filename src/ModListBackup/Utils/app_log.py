"""
app_log.py
Application log — forwards messages to the GUI log box when set, and to
the stdlib logger named "ModListBackup" always.

The GUI calls set_app_log(log_fn, after_fn) after building its log box.
Handler/Utils code calls app_log(msg) for messages meant for the user;
debug detail goes straight to logging.getLogger(__name__) in each module.

Thread safety: when app_log is called from a background thread, messages are
put on a queue and drained on the main thread via a periodic after()
callback. When called from the main thread, the message is shown immediately.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable

LOGGER_NAME = "ModListBackup"

log = logging.getLogger(LOGGER_NAME)

_log_fn: Callable[[str], None] | None = None
_after_fn: Callable | None = None
_main_thread_id: int | None = None
_log_queue: queue.Queue[str] = queue.Queue()


def configure_logging(debug: bool = False) -> None:
    """Attach a stderr handler to the package logger (once) and set its level."""
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if debug else logging.INFO)


def _drain_log_queue() -> None:
    """Run on main thread: drain queued messages and show them. Reschedule."""
    if _log_fn is None:
        return
    try:
        while True:
            msg = _log_queue.get_nowait()
            try:
                _log_fn(msg)
            except Exception:
                log.debug("GUI log sink rejected message", exc_info=True)
    except queue.Empty:
        pass
    if _after_fn is not None:
        _after_fn(50, _drain_log_queue)


def set_app_log(log_fn: Callable[[str], None] | None, after_fn: Callable | None = None) -> None:
    """Register the GUI log function and a main-thread runner (e.g. app.after).

    Passing None for log_fn detaches the GUI sink.
    """
    global _log_fn, _after_fn, _main_thread_id
    _log_fn = log_fn
    _after_fn = after_fn
    _main_thread_id = threading.current_thread().ident
    if log_fn is not None and after_fn is not None:
        after_fn(0, _drain_log_queue)


def app_log(message: str, level: int = logging.INFO) -> None:
    """Write a user-facing message to the logger and the GUI log box (thread-safe)."""
    log.log(level, message)
    if _log_fn is None:
        return
    try:
        if threading.current_thread().ident == _main_thread_id:
            _log_fn(message)
        else:
            _log_queue.put_nowait(message)
    except Exception:
        log.debug("GUI log sink rejected message", exc_info=True)
