"""One-way message channels between the search core and its UI."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(Exception):
    """Raised when receiving from a closed, drained channel."""


class Channel(Generic[T]):
    """Unbounded single-consumer queue.

    ``send`` never blocks, so publishers (including synchronous callbacks)
    can push from anywhere on the event loop thread.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, value: T) -> None:
        if self._closed:
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        self._queue.put_nowait(value)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def receive(self) -> T:
        value = await self._queue.get()
        if value is _CLOSED:
            # Keep the marker for any later receive.
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        return value

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            try:
                yield await self.receive()
            except ChannelClosed:
                return
