import copy
from typing import Any

import pytest

_ACCOUNT_SERVICE: dict[str, Any] = {
    "asyncapi": "3.0.0",
    "info": {"title": "Account Service", "version": "1.0.0"},
    "servers": {
        "production": {"host": "broker.example.com", "protocol": "amqp"},
    },
    "channels": {
        "userSignedup": {
            "address": "user/signedup",
            "messages": {"UserSignedUp": {"$ref": "#/components/messages/UserSignedUp"}},
        },
        "userDeleted": {"address": "user/deleted"},
    },
    "operations": {
        "sendUserSignedup": {
            "action": "send",
            "channel": {"$ref": "#/channels/userSignedup"},
        },
        "receiveUserSignedup": {
            "action": "receive",
            "channel": {"$ref": "#/channels/userSignedup"},
        },
    },
    "components": {
        "messages": {
            "UserSignedUp": {"payload": {"$ref": "#/components/schemas/User"}},
        },
        "schemas": {
            "User": {"type": "object", "properties": {"name": {"type": "string"}}},
        },
    },
}


@pytest.fixture
def account_service() -> dict[str, Any]:
    return copy.deepcopy(_ACCOUNT_SERVICE)
