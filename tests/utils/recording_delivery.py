from typing import List, Tuple

from src.app.services.otp_delivery import IOtpDelivery
from src.domain.entities import Identity


class RecordingOtpDelivery(IOtpDelivery):
    """Captures delivered codes so tests can complete OTP challenges"""

    def __init__(self):
        self.sent: List[Tuple[Identity, str]] = []

    async def send(self, identity: Identity, code: str) -> None:
        self.sent.append((identity, code))

    @property
    def last_code(self) -> str:
        return self.sent[-1][1]


class FailingOtpDelivery(IOtpDelivery):
    async def send(self, identity: Identity, code: str) -> None:
        raise ConnectionError("SMTP unavailable")
