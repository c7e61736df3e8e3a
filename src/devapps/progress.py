#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/progress.py
"""Progress callback system for register parsing.

This module provides a standardized way to report parsing progress to
embedders, such as a scraper that logs each page or a UI that shows a
progress bar while a long register is processed.

Examples
--------
Basic progress tracking:

    >>> from devapps import parse_register
    >>> from devapps.progress import ProgressEvent
    >>>
    >>> def my_progress_handler(event: ProgressEvent):
    ...     print(f"{event.event_type}: {event.message} ({event.current}/{event.total})")
    >>>
    >>> records = parse_register("register.pdf", dictionaries, progress_callback=my_progress_handler)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "detected", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted while a register document is parsed.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": Parsing has begun; ``total`` is the page count.
        - "detected": The reconstruction strategy was chosen.
          ``metadata["detected_type"]`` is ``"strategy"`` and
          ``metadata["strategy"]`` names it.
        - "item_done": A page was processed. ``metadata["item_type"]`` is
          ``"page"`` and ``metadata["updates"]`` counts the rows read.
        - "error": A page was skipped. ``metadata["error"]`` holds the cause.
        - "finished": Parsing completed; ``metadata["records"]`` counts the
          records returned.

    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position (1-based page number)
    total : int, default 0
        Total pages to process. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation.

        Returns
        -------
        str
            Formatted event description

        """
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise exceptions; if one does, the parser logs a warning
and carries on.
"""
