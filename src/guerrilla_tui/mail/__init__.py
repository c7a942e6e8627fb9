# =============================================================================
# Mail Module
# =============================================================================
# Talks to the Guerrilla Mail API and turns its inbox into a stream:
#   - client: Session creation, inbox listing and message fetching over HTTP
#   - poller: Async iterator yielding each new Message once, in order
# =============================================================================

from guerrilla_tui.mail.client import (
    DEFAULT_API_URL,
    GuerrillaClient,
    MailAPIError,
    MailConnectionError,
    MailError,
    MessageSummary,
)
from guerrilla_tui.mail.poller import Poller

__all__ = [
    # Client
    "DEFAULT_API_URL",
    "GuerrillaClient",
    "MailAPIError",
    "MailConnectionError",
    "MailError",
    "MessageSummary",
    # Poller
    "Poller",
]
