# pcstore/services/reset_code_store.py
import redis

from pcstore.utils.retry import redis_retry
from pcstore.utils.settings import REDIS_URL
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


class ResetCodeStore:
    """
    Kody resetu hasła w redisie.

    -jeden kod na email, nowy nadpisuje stary
    -wygasa sam po ttl (EX), nie trzeba sprzątać
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(email: str) -> str:
        return f"password-reset:{email.lower()}"

    @redis_retry()
    def save(self, email: str, code: str, ttl: int) -> None:
        key = self._key(email)
        logger.info(f"Store reset code {key} ttl={ttl}")
        #SET password-reset:a@b.c "123456" EX 3600
        self.redis.set(name=key, value=code, ex=ttl)

    @redis_retry()
    def get(self, email: str) -> str | None:
        return self.redis.get(self._key(email))

    @redis_retry()
    def delete(self, email: str) -> None:
        logger.info(f"Drop reset code {self._key(email)}")
        self.redis.delete(self._key(email))
