# storefront/services/lock_service.py
import redis
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -blokada checkoutu dla sesji (jedno zamowienie naraz)
    -zwalnianie locka tylko przez wlasciciela tokenu
    """

    def __init__(self, url: str | None = None, client=None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _checkout_key(session_id: str) -> str:
        return f"checkout:{session_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, session_id: str, token: str, ttl: int) -> bool:
        key = self._checkout_key(session_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:abc:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,
                ex=ttl,  #wygasa sam gdy proces padnie w trakcie zapisu
            )
        )

    @redis_retry()
    def release_checkout_lock(self, session_id: str, token: str) -> bool:
        key = self._checkout_key(session_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
