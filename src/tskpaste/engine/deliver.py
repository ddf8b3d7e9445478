# src/tskpaste/engine/deliver.py

"""
Delivery of TaskPaper text to the host application.

This is the only side-effecting boundary of a conversion run. Every
deliverer exposes a single method:

    deliver(text) -> bool

and reports failure by returning False (no retries, no partial success).
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Optional, Protocol, TextIO
from urllib.parse import quote

from .config import DEFAULT_BASE_URL, DEFAULT_PARAM

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------

class Deliverer(Protocol):
    def deliver(self, text: str) -> bool:
        ...


# ---------------------------------------------------------------------
# URL building
# ---------------------------------------------------------------------

def build_callback_url(
    text: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    param: str = DEFAULT_PARAM,
) -> str:
    """
    Build an x-callback-url carrying `text` as a single query parameter.

    Everything outside the unreserved set is percent-encoded (spaces as
    %20, not '+').
    """
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{quote(param, safe='')}={quote(text, safe='')}"


def default_opener() -> Optional[str]:
    """
    Return the platform URL opener found on PATH, if any.
    """
    candidates = ("open",) if sys.platform == "darwin" else ("xdg-open", "open")
    for name in candidates:
        if shutil.which(name):
            return name
    return None


# ---------------------------------------------------------------------
# Deliverers
# ---------------------------------------------------------------------

class CallbackUrlDeliverer:
    """
    Open the paste callback URL with an external opener command.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        param: str = DEFAULT_PARAM,
        opener: Optional[str] = None,
    ) -> None:
        self.base_url = base_url
        self.param = param
        self.opener = opener

    def deliver(self, text: str) -> bool:
        opener = self.opener or default_opener()
        if not opener:
            log.error("No URL opener found (tried 'open' / 'xdg-open'); set 'opener' in config")
            return False

        url = build_callback_url(text, base_url=self.base_url, param=self.param)
        log.debug("opening %s via %s (%d chars of TaskPaper)", self.base_url, opener, len(text))

        try:
            p = subprocess.run([opener, url], capture_output=True, text=True)
        except OSError as e:
            log.error("Cannot run opener '%s': %s", opener, e)
            return False

        if p.returncode != 0:
            log.error(
                "Opener '%s' failed with exit code %d: %s",
                opener,
                p.returncode,
                (p.stderr or "").strip(),
            )
            return False

        return True


class EchoDeliverer:
    """
    Print the callback URL instead of opening it (dry run).
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        param: str = DEFAULT_PARAM,
        stream: TextIO | None = None,
    ) -> None:
        self.base_url = base_url
        self.param = param
        self.stream = stream

    def deliver(self, text: str) -> bool:
        print(build_callback_url(text, base_url=self.base_url, param=self.param), file=self.stream)
        return True
