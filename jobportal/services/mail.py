import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from jobportal.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class MailError(Exception):
    """Raised when SendGrid refuses or fails to send."""


class MailService:
    def __init__(self, settings: Settings = None, client: SendGridAPIClient = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> SendGridAPIClient:
        if self._client is None:
            self._client = SendGridAPIClient(api_key=self.settings.sendgrid_api_key)
        return self._client

    def send(self, to_email: str, subject: str, text: str) -> int:
        message = Mail(from_email=self.settings.sendgrid_from,
                       to_emails=to_email,
                       subject=subject,
                       plain_text_content=text)
        try:
            resp = self.client.send(message)
        except Exception as e:
            logger.error("SendGrid email error to %s: %s", to_email, e)
            raise MailError(str(e)) from e
        logger.info("Sent '%s' to %s (status %s)", subject, to_email, resp.status_code)
        return resp.status_code
