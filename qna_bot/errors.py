"""
Exceptions raised by the QnA bot.
"""

from typing import Optional


class ConfigurationError(Exception):
    """Raised when the bot cannot be built from the supplied configuration."""


class QnAServiceError(Exception):
    """Raised when a knowledge base lookup fails."""

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body
