"""Interface every email channel adapter implements."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> dict:
        """Deliver one plain-text message.

        Returns ``{"message_id", "status"}`` where status is ``"sent"`` or
        ``"failed"``; failures also carry ``"error"``. Adapters report delivery
        problems this way instead of raising.
        """
