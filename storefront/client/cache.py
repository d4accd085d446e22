# storefront/client/cache.py
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Key = tuple
Fetcher = Callable[[], Awaitable[Any]]


def _freeze(param: Any) -> Hashable:
    if isinstance(param, dict):
        return tuple(sorted((k, _freeze(v)) for k, v in param.items()))
    if isinstance(param, (list, set)):
        return tuple(_freeze(v) for v in param)
    return param


def key_of(path, *params) -> Key:
    """('/api/orders', 5) - sciezka zasobu + opcjonalne parametry."""
    if isinstance(path, tuple):
        return tuple(_freeze(p) for p in path) + tuple(_freeze(p) for p in params)
    return (path, *(_freeze(p) for p in params))


@dataclass
class _Entry:
    value: Any = None
    has_value: bool = False
    fetched_at: float | None = None
    stale: bool = True
    stale_time: float = 0.0
    refetch_on_focus: bool = False
    fetcher: Fetcher | None = None
    task: asyncio.Task | None = None
    # rosnie przy invalidate/write; spozniony wynik starszej generacji jest pomijany
    generation: int = 0


class QueryCache:
    """
    Cache danych z serwera po stronie klienta.

    - co najwyzej jeden fetch naraz na klucz, wspolny wynik dla wszystkich czekajacych
    - wpis swiezy przez stale_time sekund od pobrania
    - invalidate po prefiksie klucza, write = optymistyczny zapis lokalny
    - bledy nie sa cache'owane

    Wszystko w jednej petli asyncio, bez watkow i lockow.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[Key, _Entry] = {}
        self.closed = False

    def _is_fresh(self, entry: _Entry) -> bool:
        if not entry.has_value or entry.stale or entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at < entry.stale_time

    def _matching(self, key: Key, exact: bool) -> list[Key]:
        if exact:
            return [key] if key in self._entries else []
        size = len(key)
        return [k for k in self._entries if k[:size] == key]

    @staticmethod
    def _detach(entry: _Entry) -> None:
        entry.generation += 1
        entry.task = None

    async def read(
        self,
        key,
        fetcher: Fetcher,
        stale_time: float = 0.0,
        refetch_on_focus: bool = False,
    ) -> Any:
        if self.closed:
            raise RuntimeError("QueryCache is closed")

        key = key_of(key)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()

        entry.fetcher = fetcher
        entry.stale_time = stale_time
        entry.refetch_on_focus = entry.refetch_on_focus or refetch_on_focus

        if self._is_fresh(entry):
            return entry.value

        if entry.task is None:
            logger.debug(f"Fetching {key}")
            entry.task = asyncio.get_running_loop().create_task(
                self._fetch(key, entry, fetcher, entry.generation)
            )
        else:
            logger.debug(f"Joining in-flight fetch of {key}")

        # shield: anulowanie jednego czytelnika nie anuluje wspolnego fetcha
        return await asyncio.shield(entry.task)

    async def _fetch(self, key: Key, entry: _Entry, fetcher: Fetcher, generation: int) -> Any:
        try:
            value = await fetcher()
        finally:
            if entry.task is asyncio.current_task():
                entry.task = None

        if self._entries.get(key) is entry and entry.generation == generation:
            entry.value = value
            entry.has_value = True
            entry.fetched_at = self._clock()
            entry.stale = False
        else:
            logger.debug(f"Dropping late result for {key}")
        return value

    def peek(self, key) -> Any:
        entry = self._entries.get(key_of(key))
        return entry.value if entry is not None and entry.has_value else None

    def is_stale(self, key) -> bool:
        entry = self._entries.get(key_of(key))
        return entry is None or not self._is_fresh(entry)

    def write(self, key, value: Any) -> None:
        """Optymistyczny zapis - swiezy od teraz, wygrywa z fetchem w locie."""
        key = key_of(key)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        self._detach(entry)
        entry.value = value
        entry.has_value = True
        entry.fetched_at = self._clock()
        entry.stale = False

    def invalidate(self, key, exact: bool = False) -> int:
        """Oznacza wpisy jako nieaktualne; nastepny read pobiera od nowa."""
        keys = self._matching(key_of(key), exact)
        for k in keys:
            entry = self._entries[k]
            entry.stale = True
            self._detach(entry)
        if keys:
            logger.debug(f"Invalidated {len(keys)} entries under {key_of(key)}")
        return len(keys)

    def remove(self, key, exact: bool = False) -> int:
        keys = self._matching(key_of(key), exact)
        for k in keys:
            self._detach(self._entries.pop(k))
        return len(keys)

    def clear(self) -> None:
        for entry in self._entries.values():
            self._detach(entry)
        self._entries.clear()

    async def on_focus(self) -> None:
        """Powrot do aplikacji: odswieza wpisy z refetch_on_focus."""
        targets = [
            (k, e) for k, e in self._entries.items() if e.refetch_on_focus and e.fetcher is not None
        ]
        for _, entry in targets:
            entry.stale = True

        results = await asyncio.gather(
            *(self.read(k, e.fetcher, e.stale_time, True) for k, e in targets),
            return_exceptions=True,
        )
        for (k, _), result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning(f"Revalidation of {k} failed: {result}")

    def close(self) -> None:
        self.clear()
        self.closed = True
