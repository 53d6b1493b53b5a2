"""Single-writer queue for settings.json.

Every submit gets a monotonically increasing token. The worker thread always
writes the newest pending document; anything submitted before it and not yet
written is dropped, so the file on disk always ends with the last record
submitted.
"""
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SettingsWriter:
    def __init__(
        self,
        path: Path,
        on_written: Optional[Callable[[int], None]] = None,
        on_failed: Optional[Callable[[int, Exception], None]] = None,
    ):
        self._path = Path(path)
        self._on_written = on_written
        self._on_failed = on_failed
        self._cond = threading.Condition()
        self._pending: Optional[tuple[int, str]] = None
        self._next_token = 0
        self._done_token = 0
        self._last_written_token = 0
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_written_token(self) -> int:
        with self._cond:
            return self._last_written_token

    def start(self) -> None:
        with self._cond:
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(
                target=self._run, name="settings-writer", daemon=True
            )
            self._thread.start()

    def submit(self, contents: str) -> int:
        """Queue a full document for writing. Returns its ordering token."""
        self.start()
        with self._cond:
            self._next_token += 1
            token = self._next_token
            if self._pending is not None:
                logger.debug(f"Settings write {self._pending[0]} superseded by {token}")
            self._pending = (token, contents)
            self._cond.notify_all()
        return token

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Block until everything submitted so far has been written (or failed)."""
        with self._cond:
            target = self._next_token
            return self._cond.wait_for(lambda: self._done_token >= target, timeout)

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """Write whatever is pending, then end the worker thread."""
        with self._cond:
            if not self._running:
                return
            self._running = False
            self._cond.notify_all()
            thread = self._thread
        if thread is not None:
            thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._pending is None and self._running:
                    self._cond.wait()
                if self._pending is None:
                    return
                token, contents = self._pending
                self._pending = None
            error: Optional[Exception] = None
            try:
                self._write(contents)
            except OSError as e:
                error = e
                logger.error(f"Encountered write exception for {self._path}: {e}")
            with self._cond:
                self._done_token = max(self._done_token, token)
                if error is None:
                    self._last_written_token = token
                self._cond.notify_all()
            if error is None:
                logger.debug(f"Successfully saved settings to {self._path} (write {token})")
            try:
                if error is None:
                    if self._on_written:
                        self._on_written(token)
                elif self._on_failed:
                    self._on_failed(token, error)
            except Exception as e:
                # The worker must outlive a broken listener
                logger.error(f"Settings write callback failed for write {token}: {e}", exc_info=True)

    def _write(self, contents: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(contents)
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
