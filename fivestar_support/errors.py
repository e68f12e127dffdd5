"""Error types raised by the FiveStar Support client."""

from typing import Optional


class FiveStarAPIError(Exception):
    """API error from FiveStar Support.

    ``status_code`` is the HTTP status of the failed response, or None when the
    server answered 200 but the body could not be decoded.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"<FiveStarAPIError(message={self.message!r}, status_code={self.status_code})>"
