from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("shiptrack.api.transport")


class Transport(Protocol):
    def get_text(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> str:
        ...


class RequestsTransport:
    """Requests session wrapper.

    One attempt per call: a failed request (connection error, timeout, non-2xx)
    raises the underlying requests exception to the caller.
    """

    def __init__(self, timeout: float = 30, *, verify: bool = True) -> None:
        self.session = requests.Session()
        self.timeout = timeout
        self.verify = verify

        adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
        # mount both http and https
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def get(self, url: str, *, headers: Optional[Dict[str, str]] = None, params: Optional[Dict[str, Any]] = None):
        return self.session.get(url, headers=headers, params=params, timeout=self.timeout, verify=self.verify)

    def get_text(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> str:
        resp = self.get(url, params=params)
        logger.debug("GET %s -> status=%s bytes=%s", url, resp.status_code, len(resp.content or b""))
        resp.raise_for_status()
        return resp.text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


@dataclass
class ReplayTransport:
    """Serves a previously saved response body instead of calling the network.

    `path` must point to a file holding one raw carrier response.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        if not self.path.exists():
            raise ValueError(f"Replay file does not exist: {self.path}")
        if not self.path.is_file():
            raise ValueError(f"Replay path is not a file: {self.path}")

    def get_text(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> str:
        logger.debug("Replaying %s for GET %s", self.path, url)
        return self.path.read_text(encoding="utf-8")

    def close(self) -> None:
        pass
