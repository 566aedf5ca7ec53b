from abc import ABC, abstractmethod

from libs.result import Result


class IMailSender(ABC):
    """Outbound mail interface - application layer"""

    @abstractmethod
    async def send(self, to_address: str, subject: str, body: str) -> Result[None]:
        """
        Deliver a plain-text message.

        Returns:
            Result with None on success, or Error(DELIVERY_FAILED)
        """
        pass
