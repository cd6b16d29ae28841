# cutview/logger.py
# Console messages for the viewer and the exporter.
#
# What goes through here:
#   info   successful loads ("Loaded N plate(s) ...") and each written PNG
#   warn   a failed load; the engine keeps showing the previous solution
#   debug  per-run detail only shown with --verbose (list of exported files)
#   error  CLI-fatal problems (unreadable/malformed document, bad --plate,
#          export failure); printed even with --quiet
#
# Streams are looked up at call time unless pinned, so redirected or
# captured stdout/stderr still receive the output.

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[cutview]"
    out: Optional[TextIO] = None
    err: Optional[TextIO] = None

    def _emit(self, stream: Optional[TextIO], fallback: TextIO, text: str) -> None:
        print(f"{self.prefix} {text}", file=stream if stream is not None else fallback)

    def debug(self, msg: str) -> None:
        if self.enabled and self.verbose:
            self._emit(self.out, sys.stdout, msg)

    def info(self, msg: str) -> None:
        if self.enabled:
            self._emit(self.out, sys.stdout, msg)

    def warn(self, msg: str) -> None:
        if self.enabled:
            self._emit(self.err, sys.stderr, f"WARNING: {msg}")

    def error(self, msg: str) -> None:
        # --quiet does not hide errors
        self._emit(self.err, sys.stderr, f"ERROR: {msg}")


LOGGER = Logger(enabled=True)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def configure(quiet: bool = False, verbose: bool = False) -> Logger:
    """Apply the CLI's --quiet / --verbose switches; --quiet wins."""
    LOGGER.enabled = not quiet
    LOGGER.verbose = bool(verbose) and not quiet
    return LOGGER


def get_logger() -> Logger:
    return LOGGER
