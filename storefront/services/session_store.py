# storefront/services/session_store.py
import redis

from storefront.utils.hash_utils import new_token
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SessionStore:
    """
    Sesje po stronie serwera:
    -cookie niesie tylko losowy token
    -redis trzyma session:{token} -> user_id z TTL, wygasa sam
    """

    def __init__(self, client=None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = client if client is not None else redis.Redis.from_url(
            REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(token: str) -> str:
        return f"session:{token}"

    @redis_retry()
    def create(self, user_id: int) -> str:
        token = new_token()
        self.redis.set(name=self._key(token), value=str(user_id), ex=self.ttl)
        logger.info(f"Session created for user {user_id}")
        return token

    @redis_retry()
    def get_user_id(self, token: str | None) -> int | None:
        if not token:
            return None
        value = self.redis.get(self._key(token))
        return int(value) if value is not None else None

    @redis_retry()
    def destroy(self, token: str | None) -> bool:
        if not token:
            return False
        return bool(self.redis.delete(self._key(token)))
