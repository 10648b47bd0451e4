"""Tests for the provider event registry."""

import pytest

from web3_providers_http import EventEmitter, ProviderEvent


@pytest.mark.asyncio
async def test_listeners_called_in_registration_order():
    emitter = EventEmitter()
    calls = []
    emitter.on("connect", lambda info: calls.append(("first", info)))
    emitter.on(ProviderEvent.CONNECT, lambda info: calls.append(("second", info)))

    assert await emitter.emit("connect", {"chainId": "0x1"}) is True

    assert calls == [("first", {"chainId": "0x1"}), ("second", {"chainId": "0x1"})]


@pytest.mark.asyncio
async def test_emit_without_listeners():
    assert await EventEmitter().emit("disconnect", {"code": 4900}) is False


@pytest.mark.asyncio
async def test_coroutine_listeners_are_awaited():
    emitter = EventEmitter()
    seen = []

    async def on_chain_changed(chain_id):
        seen.append(chain_id)

    emitter.on("chainChanged", on_chain_changed)
    await emitter.emit("chainChanged", "0x5")

    assert seen == ["0x5"]


@pytest.mark.asyncio
async def test_once_fires_a_single_time():
    emitter = EventEmitter()
    calls = []
    emitter.once("connect", calls.append)

    await emitter.emit("connect", 1)
    await emitter.emit("connect", 2)

    assert calls == [1]
    assert emitter.listener_count("connect") == 0


@pytest.mark.asyncio
async def test_off_removes_plain_and_once_listeners():
    emitter = EventEmitter()
    calls = []
    emitter.on("disconnect", calls.append).once("disconnect", calls.append)

    emitter.off("disconnect", calls.append)
    assert emitter.listeners("disconnect") == [calls.append]
    emitter.off("disconnect", calls.append)

    await emitter.emit("disconnect", {"code": 4900})
    assert calls == []


@pytest.mark.asyncio
async def test_failing_listener_does_not_stop_others():
    emitter = EventEmitter()
    calls = []

    def broken(_):
        raise RuntimeError("listener bug")

    emitter.on("connect", broken)
    emitter.on("connect", calls.append)
    await emitter.emit("connect", {"chainId": "0x1"})

    assert calls == [{"chainId": "0x1"}]


def test_unknown_event_rejected():
    emitter = EventEmitter()
    with pytest.raises(ValueError, match="Unsupported event 'message'"):
        emitter.on("message", print)


def test_listener_must_be_callable():
    with pytest.raises(TypeError):
        EventEmitter().on("connect", "not callable")


def test_remove_all_listeners():
    emitter = EventEmitter()
    emitter.on("connect", print).on("disconnect", print)

    emitter.remove_all_listeners("connect")
    assert emitter.listener_count("connect") == 0
    assert emitter.listener_count("disconnect") == 1

    emitter.remove_all_listeners()
    assert emitter.listener_count("disconnect") == 0
