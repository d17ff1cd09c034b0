import logging

from src.app.services.otp_delivery import IOtpDelivery
from src.domain.entities import Identity

logger = logging.getLogger(__name__)


class LoggingOtpDelivery(IOtpDelivery):
    """
    Delivery channel that writes to the application log.

    Stand-in until an email/SMS channel is wired. Codes are only written
    when log_codes is enabled (local development).
    """

    def __init__(self, log_codes: bool = False):
        self.log_codes = log_codes

    async def send(self, identity: Identity, code: str) -> None:
        destination = identity.email or identity.phone or identity.username
        if self.log_codes:
            logger.info(f"OTP for identity {identity.id} <{destination}>: {code} (dev only)")
        else:
            logger.info(f"OTP issued for identity {identity.id} <{destination}>")
