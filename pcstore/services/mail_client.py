# pcstore/services/mail_client.py
import requests

from pcstore.utils.retry import http_retry
from pcstore.utils.settings import MAIL_API_URL, MAIL_API_KEY, MAIL_SENDER
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


class MailClient:
    """
    Klient HTTP do zewnętrznego API mailowego.

    Bez MAIL_API_URL (dev, testy) maila nie wysyłamy, tylko logujemy.
    """

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: int = 5):
        self.base_url = (base_url if base_url is not None else MAIL_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else MAIL_API_KEY
        self.timeout = timeout

    @http_retry()
    def send(self, to: str, subject: str, body: str) -> bool:
        if not self.base_url:
            logger.info(f"[MAIL disabled] to={to} subject={subject!r}")
            return False

        url = f"{self.base_url}/send"
        logger.info(f"MailClient POST {url} to={to}")

        resp = requests.post(
            url,
            json={"from": MAIL_SENDER, "to": to, "subject": subject, "text": body},
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return True
