# =============================================================================
# Guerrilla Mail Client
# =============================================================================
# A small synchronous client for the Guerrilla Mail JSON API.
#
# Key responsibilities:
#   - Create a session and obtain a disposable address (get_email_address)
#   - List messages newer than a sequence cursor (check_email)
#   - Fetch a full message, body included (fetch_email)
#
# Design notes:
#   - The API keys everything off a session token (sid_token), which is
#     refreshed from every response that carries one
#   - Calls block; the poller runs them in a worker thread
#   - Message ids are numeric strings that increase with arrival order
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import requests

from guerrilla_tui.core import Message

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.guerrillamail.com/ajax.php"


@dataclass(frozen=True)
class MessageSummary:
    """
    An inbox listing entry (no body).

    Attributes:
        id: Service message id.
        sender: "From" address.
        subject: Subject line.
        excerpt: Short preview of the body.
        timestamp: Arrival time.
        is_read: Whether the message has been fetched before.
    """
    id: str
    sender: str
    subject: str
    excerpt: str
    timestamp: datetime
    is_read: bool = False

    @property
    def sequence(self) -> int:
        """Numeric form of the id, used as the polling cursor."""
        return int(self.id)


def _parse_timestamp(value: Any) -> datetime:
    """Convert a unix timestamp (int or numeric string) to an aware datetime."""
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug(f"Unparseable mail timestamp {value!r}, using current time")
        return datetime.now(tz=timezone.utc)


class GuerrillaClient:
    """
    Client for one Guerrilla Mail session.

    Usage:
        >>> client = GuerrillaClient()
        >>> client.connect()
        >>> client.address
        'abcdef@guerrillamailblock.com'
        >>> for summary in client.check_email(seq=0):
        ...     message = client.fetch_email(summary.id)

    Attributes:
        api_url: Endpoint of the JSON API.
        address: The disposable address, once connected.
    """

    # Timeout for HTTP requests (seconds)
    TIMEOUT = 30

    # The API wants a client IP and user agent on every call
    CLIENT_IP = "127.0.0.1"
    USER_AGENT = "guerrilla-tui"

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_url: Endpoint of the JSON API.
            session: HTTP session to use. A new one is created if omitted.
        """
        self.api_url = api_url
        self.address = ""
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", self.USER_AGENT)
        self._sid_token: str | None = None

    @property
    def is_connected(self) -> bool:
        """True once a session token has been obtained."""
        return self._sid_token is not None

    # =========================================================================
    # Transport
    # =========================================================================

    def _call(self, function: str, **params: Any) -> Any:
        """
        Call one API function and return the decoded JSON response.

        Raises:
            MailConnectionError: If the request could not be completed.
            MailAPIError: If the service answered with an error or non-JSON.
        """
        query = {
            "f": function,
            "ip": self.CLIENT_IP,
            "agent": self.USER_AGENT,
            **params,
        }
        if self._sid_token:
            query["sid_token"] = self._sid_token

        logger.debug(f"API call {function} {params}")
        try:
            response = self._session.get(self.api_url, params=query, timeout=self.TIMEOUT)
        except requests.RequestException as e:
            raise MailConnectionError(f"Request to {function} failed: {e}") from e

        if response.status_code != 200:
            raise MailAPIError(f"{function} returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise MailAPIError(f"{function} returned invalid JSON") from e

        if isinstance(data, dict):
            if "error" in data:
                raise MailAPIError(f"{function} failed: {data['error']}")
            if data.get("sid_token"):
                self._sid_token = data["sid_token"]

        return data

    # =========================================================================
    # Session
    # =========================================================================

    def connect(self) -> str:
        """
        Start a session and obtain a disposable address.

        Returns:
            The full email address.

        Raises:
            MailError: If the service could not create a session.
        """
        logger.info(f"Requesting a new address from {self.api_url}")
        data = self._call("get_email_address", lang="en")

        address = data.get("email_addr", "") if isinstance(data, dict) else ""
        if not address:
            raise MailAPIError("get_email_address returned no address")

        self.address = address
        logger.info(f"Session started for {self.address}")
        return self.address

    @property
    def local_part(self) -> str:
        """The part of the address before the '@'."""
        return self.address.split("@", 1)[0]

    # =========================================================================
    # Messages
    # =========================================================================

    def check_email(self, seq: int = 0) -> list[MessageSummary]:
        """
        List messages newer than ``seq``.

        Args:
            seq: Id of the newest message already seen (0 for all).

        Returns:
            Summaries ordered oldest first.
        """
        data = self._call("check_email", seq=seq)
        entries = data.get("list", []) if isinstance(data, dict) else []

        summaries = []
        for entry in entries:
            mail_id = str(entry.get("mail_id", ""))
            if not mail_id.isdigit():
                logger.warning(f"Skipping inbox entry with bad id {mail_id!r}")
                continue
            summaries.append(MessageSummary(
                id=mail_id,
                sender=entry.get("mail_from", ""),
                subject=entry.get("mail_subject", ""),
                excerpt=entry.get("mail_excerpt", ""),
                timestamp=_parse_timestamp(entry.get("mail_timestamp")),
                is_read=str(entry.get("mail_read", "0")) == "1",
            ))

        summaries.sort(key=lambda s: s.sequence)
        return summaries

    def fetch_email(self, mail_id: str) -> Message:
        """
        Fetch a complete message.

        Raises:
            MailAPIError: If the message does not exist.
        """
        data = self._call("fetch_email", email_id=mail_id)
        if not isinstance(data, dict) or not data:
            raise MailAPIError(f"Message {mail_id} not found")

        return Message(
            id=str(data.get("mail_id", mail_id)),
            subject=data.get("mail_subject", ""),
            sender=data.get("mail_from", ""),
            timestamp=_parse_timestamp(data.get("mail_timestamp")),
            body=data.get("mail_body", ""),
            excerpt=data.get("mail_excerpt", ""),
            is_read=str(data.get("mail_read", "0")) == "1",
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()


# =============================================================================
# Exceptions
# =============================================================================

class MailError(Exception):
    """Base exception for mail service operations."""
    pass


class MailConnectionError(MailError):
    """Raised when the mail service cannot be reached."""
    pass


class MailAPIError(MailError):
    """Raised when the mail service rejects a request or answers nonsense."""
    pass
