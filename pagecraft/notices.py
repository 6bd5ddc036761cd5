"""User-facing notices raised by the editor session.

The session never raises for user-driven problems; it reports them here
instead. Hosts plug in whatever surface they have (toasts, a status bar, the
terminal).
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import sys
import typing as typ

logger = logging.getLogger(__name__)


class NoticeLevel(enum.StrEnum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dc.dataclass(slots=True, frozen=True)
class Notice:
    level: NoticeLevel
    message: str


class Notifier(typ.Protocol):
    def notify(self, notice: Notice) -> None: ...


class LoggingNotifier:
    """Send notices to the ``pagecraft.notices`` logger."""

    _LEVELS: typ.ClassVar[dict[NoticeLevel, int]] = {
        NoticeLevel.SUCCESS: logging.INFO,
        NoticeLevel.INFO: logging.INFO,
        NoticeLevel.WARNING: logging.WARNING,
        NoticeLevel.ERROR: logging.ERROR,
    }

    def notify(self, notice: Notice) -> None:
        logger.log(self._LEVELS[notice.level], "%s", notice.message)


class ConsoleNotifier:
    """Print notices to a text stream, errors and warnings to stderr."""

    def __init__(self, stream: typ.TextIO | None = None) -> None:
        self._stream = stream

    def notify(self, notice: Notice) -> None:
        stream = self._stream
        if stream is None:
            failed = notice.level in {NoticeLevel.WARNING, NoticeLevel.ERROR}
            stream = sys.stderr if failed else sys.stdout
        print(f"[{notice.level}] {notice.message}", file=stream)


class CollectingNotifier:
    """Keep notices in memory so a shell can render them later."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def messages(self) -> list[str]:
        return [notice.message for notice in self.notices]

    def clear(self) -> None:
        self.notices.clear()


__all__ = [
    "CollectingNotifier",
    "ConsoleNotifier",
    "LoggingNotifier",
    "Notice",
    "NoticeLevel",
    "Notifier",
]
