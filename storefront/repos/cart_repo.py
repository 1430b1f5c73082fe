# storefront/repos/cart_repo.py
from typing import Callable

import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL


class CartStorage:
    """
    Trwaly magazyn klucz-wartosc dla koszykow sesji (Redis).
    get / update / remove - same stringi, serializacja po stronie CartStore.
    """

    def __init__(self, url: str | None = None, client=None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def get(self, key: str) -> str | None:
        return self.redis.get(key)

    @redis_retry()
    def update(
        self,
        key: str,
        mutate: Callable[[str | None], str | None],
        ttl: int | None = None,
    ) -> str | None:
        """
        Atomowy read-modify-write (WATCH/MULTI).
        mutate dostaje aktualna wartosc i zwraca nowa, None = usun klucz.
        Przy konflikcie (WatchError) redis-py powtarza cala funkcje.
        """

        def _tx(pipe):
            new_value = mutate(pipe.get(key))
            pipe.multi()
            if new_value is None:
                pipe.delete(key)
            else:
                #EX odswiezany przy kazdej zmianie koszyka
                pipe.set(key, new_value, ex=ttl)
            return new_value

        return self.redis.transaction(_tx, key, value_from_callable=True)

    @redis_retry()
    def remove(self, key: str) -> None:
        self.redis.delete(key)
