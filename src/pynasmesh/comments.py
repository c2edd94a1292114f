"""Recover property names from ``$`` comment lines."""

from __future__ import annotations


class CommentTracker:
    """Remembers the last word of the most recent comment line.

    Mesh generators commonly write a comment such as ``$ Property 1 inlet``
    directly above a PSOLID/PSHELL card. The name is only attached to a
    card that starts on the line right after the comment.
    """

    def __init__(self) -> None:
        self.name: str | None = None
        self.line: int | None = None

    def observe(self, text: str, line_number: int) -> None:
        """Record a comment.

        Args:
            text: The comment line, with or without its leading ``$``.
            line_number: Stream line number after the comment was consumed,
                i.e. the line of the card that follows it.
        """
        words = text.lstrip("$").split()
        self.name = words[-1] if words else None
        self.line = line_number

    def name_for(self, line_number: int) -> str | None:
        """Return the tracked name if it belongs to ``line_number``."""
        if self.line != line_number:
            return None
        return self.name
