"""Tests for message channels."""

from __future__ import annotations

import pytest

from hovercraft.channels import Channel, ChannelClosed


class TestChannel:
    """Test Channel."""

    @pytest.mark.asyncio
    async def test_send_receive_in_order(self) -> None:
        channel: Channel[int] = Channel("numbers")
        channel.send(1)
        channel.send(2)

        assert await channel.receive() == 1
        assert await channel.receive() == 2

    @pytest.mark.asyncio
    async def test_iteration_stops_on_close(self) -> None:
        """Queued values are drained before iteration ends."""
        channel: Channel[str] = Channel("words")
        channel.send("a")
        channel.send("b")
        channel.close()

        assert [value async for value in channel] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_receive_after_close(self) -> None:
        channel: Channel[str] = Channel("words")
        channel.close()

        with pytest.raises(ChannelClosed):
            await channel.receive()
        with pytest.raises(ChannelClosed):
            await channel.receive()

    def test_send_after_close(self) -> None:
        channel: Channel[str] = Channel("words")
        channel.close()

        assert channel.closed
        with pytest.raises(ChannelClosed, match="words"):
            channel.send("late")

    def test_close_twice(self) -> None:
        channel: Channel[str] = Channel("words")
        channel.close()
        channel.close()
        assert channel.closed
