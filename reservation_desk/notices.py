from __future__ import annotations

from typing import List, Tuple

Notice = Tuple[str, str]  # (level, message)


class Notifier:
    """Queues user-facing messages until the page renders them.

    Commands run inside widget callbacks, before the page body is drawn, so
    messages are collected here and flushed at the top of the next render.
    """

    def __init__(self):
        self._queue: List[Notice] = []

    def error(self, message: str) -> None:
        self._queue.append(("error", message))

    def warning(self, message: str) -> None:
        self._queue.append(("warning", message))

    def success(self, message: str) -> None:
        self._queue.append(("success", message))

    @property
    def pending(self) -> List[Notice]:
        return list(self._queue)

    def drain(self) -> List[Notice]:
        notices, self._queue = self._queue, []
        return notices
