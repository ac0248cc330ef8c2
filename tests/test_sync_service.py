import json

import pytest

from models.shopping_list import ShoppingListItem
from services.sync_service import ConnectionManager, build_message


class FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.accepted = False
        self.sent = []
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_text(self, text: str):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(text))


class TestBuildMessage:

    def test_model_payload_uses_camel_case(self):
        item = ShoppingListItem(item_name_en="Flour", quantity="1.2", unit="kg")

        message = json.loads(build_message("shopping", "create", item))

        assert message["type"] == "shopping"
        assert message["action"] == "create"
        assert message["data"]["itemNameEn"] == "Flour"
        assert message["data"]["id"] == str(item.id)
        assert isinstance(message["timestamp"], int)

    def test_dict_payload(self):
        message = json.loads(build_message("recipes", "delete", {"id": "abc"}))
        assert message["data"] == {"id": "abc"}


class TestConnectionManager:

    @pytest.mark.asyncio
    async def test_connect_sends_welcome(self):
        manager = ConnectionManager()
        websocket = FakeWebSocket()

        await manager.connect(websocket)

        assert websocket.accepted
        assert websocket.sent[0]["type"] == "system"
        assert websocket.sent[0]["action"] == "connected"
        assert manager.connection_count == 1

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_client(self):
        manager = ConnectionManager()
        first, second = FakeWebSocket(), FakeWebSocket()
        await manager.connect(first)
        await manager.connect(second)

        delivered = await manager.broadcast_change("pantry", "update", {"id": "1"})

        assert delivered == 2
        assert first.sent[-1]["type"] == "pantry"
        assert second.sent[-1]["data"] == {"id": "1"}

    @pytest.mark.asyncio
    async def test_failed_client_is_dropped(self):
        manager = ConnectionManager()
        healthy = FakeWebSocket()
        await manager.connect(healthy)
        broken = FakeWebSocket(fail=True)
        manager.active_connections.add(broken)

        delivered = await manager.broadcast_change("tools", "toggle")

        assert delivered == 1
        assert broken not in manager.active_connections
        assert healthy.sent[-1]["data"] == {}

    @pytest.mark.asyncio
    async def test_disconnect(self):
        manager = ConnectionManager()
        websocket = FakeWebSocket()
        await manager.connect(websocket)

        manager.disconnect(websocket)
        manager.disconnect(websocket)

        assert manager.connection_count == 0
        assert await manager.broadcast_change("recipes", "create", {}) == 0
