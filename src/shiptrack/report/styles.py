from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Optional
import os

_CODES = {
    "bold": ("\x1b[1m", "\x1b[22m"),
    "dim": ("\x1b[2m", "\x1b[22m"),
    "blue": ("\x1b[34m", "\x1b[39m"),
    "green": ("\x1b[32m", "\x1b[39m"),
    "grey": ("\x1b[90m", "\x1b[39m"),
    "banner": ("\x1b[1;97;100m", "\x1b[0m"),
}


@dataclass(frozen=True)
class Palette:
    """Terminal styling. With enabled=False every method returns text unchanged."""

    enabled: bool = True

    @classmethod
    def for_stream(cls, stream: IO[str], *, force: Optional[bool] = None) -> "Palette":
        if force is not None:
            return cls(enabled=force)
        if os.getenv("NO_COLOR"):
            return cls(enabled=False)
        isatty = getattr(stream, "isatty", None)
        return cls(enabled=bool(callable(isatty) and isatty()))

    def _wrap(self, style: str, text: str) -> str:
        if not self.enabled or not text:
            return text
        start, end = _CODES[style]
        return f"{start}{text}{end}"

    def bold(self, text: str) -> str:
        return self._wrap("bold", text)

    def dim(self, text: str) -> str:
        return self._wrap("dim", text)

    def blue(self, text: str) -> str:
        return self._wrap("blue", text)

    def green(self, text: str) -> str:
        return self._wrap("green", text)

    def grey(self, text: str) -> str:
        return self._wrap("grey", text)

    def banner(self, text: str) -> str:
        return self._wrap("banner", text)
