from abc import ABC, abstractmethod

from src.domain.entities import Identity


class IOtpDelivery(ABC):
    """Delivery channel for one-time codes (email, SMS, ...)"""

    @abstractmethod
    async def send(self, identity: Identity, code: str) -> None:
        """Hand the code to the channel. Failures are the channel's concern."""
        pass
