"""Subscriber transport doubles for streaming tests."""

import asyncio


class RecordingTransport:
    """Transport that records writes and can start failing after N of them.

    Args:
        fail_after: Number of successful writes before every further write
            raises ConnectionResetError (None: never fail).
    """

    def __init__(self, fail_after: int | None = None):
        self.messages = []
        self.close_count = 0
        self._fail_after = fail_after

    @property
    def kinds(self) -> list[str]:
        return [message.kind.value for message in self.messages]

    @property
    def enqueued(self) -> int:
        return len(self.messages)

    @property
    def drained(self) -> int:
        return len(self.messages)

    async def write(self, message):
        if self._fail_after is not None and len(self.messages) >= self._fail_after:
            raise ConnectionResetError("client went away")
        self.messages.append(message)

    def close(self):
        self.close_count += 1


class StallingTransport(RecordingTransport):
    """Transport that accepts N writes, then blocks forever."""

    async def write(self, message):
        if self._fail_after is not None and len(self.messages) >= self._fail_after:
            await asyncio.Event().wait()
        self.messages.append(message)
