"""Callback-based logging shared by navigator components."""

from __future__ import annotations

from typing import Callable

LogCallback = Callable[[str, str], None]


class Loggable:
    """
    Mixin giving a component a pluggable log sink.

    The app installs a callback that writes into its debug console; with no
    callback set, log calls do nothing.
    """

    # Prefix shown in front of every message, e.g. "GATEWAY"
    log_name: str = "NAV"

    _log_callback: LogCallback | None = None

    def set_logger(self, callback: LogCallback | None) -> None:
        """Set logging callback. Signature: callback(level, message)."""
        self._log_callback = callback

    def _log(self, level: str, message: str) -> None:
        if self._log_callback:
            self._log_callback(level, f"[{self.log_name}] {message}")

    def _log_info(self, message: str) -> None:
        self._log("INFO", message)

    def _log_warning(self, message: str) -> None:
        self._log("WARN", message)

    def _log_error(self, message: str) -> None:
        self._log("ERROR", message)
