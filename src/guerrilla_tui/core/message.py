# =============================================================================
# Message Model
# =============================================================================
# Represents one email received by the disposable inbox.
#
# Messages are created by the mail layer (see guerrilla_tui.mail) and handed
# to the printer one at a time. The rendering code treats them as read-only:
# nothing downstream mutates or stores a Message after it has been printed.
# =============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Message:
    """
    Represents a received email message.

    Attributes:
        id: Service-assigned message id. Used as a display label only; ids
            are not guaranteed to be unique across sessions.
        subject: Subject line (may be empty).
        sender: The "From" address as reported by the service.
        timestamp: When the message was received (timezone-aware).
        body: Message body. May be plain text or an HTML fragment.
        excerpt: Short preview text from the inbox listing.
        is_read: Whether the service reports the message as read.

    Example:
        >>> message = Message(
        ...     id="42",
        ...     subject="Hi",
        ...     sender="a@b.com",
        ...     timestamp=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        ...     body="plain text, no tags",
        ... )
    """
    id: str
    subject: str = ""
    sender: str = ""
    timestamp: datetime = datetime.fromtimestamp(0, tz=timezone.utc)
    body: str = ""
    excerpt: str = ""
    is_read: bool = False

    @property
    def has_body(self) -> bool:
        """Returns True if the message carries any non-blank body text."""
        return bool(self.body.strip())

    def __str__(self) -> str:
        """Human-readable representation."""
        read_marker = " " if self.is_read else "*"
        return f"{read_marker} #{self.id} {self.sender}: {self.subject}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"Message(id={self.id!r}, subject={self.subject!r}, "
            f"from={self.sender!r})"
        )
