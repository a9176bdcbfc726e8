"""Immutable, navigable view over one parsed revision of an API document."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from apidoc_viewer.document.pointer import split_pointer

_V2_ACTIONS = ("publish", "subscribe")


@dataclass(frozen=True, slots=True)
class Server:
    id: str
    url: str | None


@dataclass(frozen=True, slots=True)
class Channel:
    id: str
    address: str | None


@dataclass(frozen=True, slots=True)
class Operation:
    id: str
    action: str | None
    channel_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Component:
    id: str
    data: Mapping[str, Any]


class DocumentSnapshot:
    """One immutable revision of an API description document.

    The snapshot keeps a private deep copy of the plain document and never
    hands it out directly: `json()` returns a fresh copy every time, so
    neither the diff engine nor rendering can mutate a revision after the
    fact. Both AsyncAPI 3 (top-level `operations` referencing channels) and
    AsyncAPI 2 (`publish`/`subscribe` nested under channels) layouts are
    navigable.
    """

    __slots__ = ("_document", "_servers", "_channels", "_operations")

    def __init__(self, document: Mapping[str, Any]) -> None:
        self._document: dict[str, Any] = copy.deepcopy(dict(document))
        self._servers = tuple(self._build_servers())
        self._channels = tuple(self._build_channels())
        self._operations = tuple(self._build_operations())

    def __repr__(self) -> str:
        title = (self.info() or {}).get("title")
        return f"DocumentSnapshot(version={self.version()!r}, title={title!r})"

    def json(self) -> dict[str, Any]:
        return copy.deepcopy(self._document)

    def version(self) -> str | None:
        marker = self._document.get("asyncapi")
        return marker if isinstance(marker, str) and marker else None

    def major_version(self) -> int | None:
        version = self.version()
        if version is None:
            return None
        head = version.split(".", 1)[0]
        return int(head) if head.isdigit() else None

    def info(self) -> Mapping[str, Any] | None:
        info = self._document.get("info")
        return MappingProxyType(info) if isinstance(info, dict) else None

    def servers(self) -> tuple[Server, ...]:
        return self._servers

    def channels(self) -> tuple[Channel, ...]:
        return self._channels

    def channel(self, channel_id: str) -> Channel | None:
        for channel in self._channels:
            if channel.id == channel_id:
                return channel
        return None

    def operations(self) -> tuple[Operation, ...]:
        return self._operations

    def operation_channels(self, operation: Operation) -> list[Channel]:
        return [
            channel
            for channel_id in operation.channel_ids
            if (channel := self.channel(channel_id)) is not None
        ]

    def messages(self) -> tuple[Component, ...]:
        return self._components("messages")

    def schemas(self) -> tuple[Component, ...]:
        return self._components("schemas")

    def has_components(self) -> bool:
        components = self._document.get("components")
        return isinstance(components, dict) and bool(components)

    def _components(self, kind: str) -> tuple[Component, ...]:
        components = self._document.get("components")
        if not isinstance(components, dict):
            return ()
        items = components.get(kind)
        if not isinstance(items, dict):
            return ()
        return tuple(
            Component(id=str(key), data=MappingProxyType(value if isinstance(value, dict) else {}))
            for key, value in items.items()
        )

    def _build_servers(self) -> list[Server]:
        servers = self._document.get("servers")
        if not isinstance(servers, dict):
            return []
        result: list[Server] = []
        for server_id, body in servers.items():
            body = body if isinstance(body, dict) else {}
            url = body.get("url") or body.get("host")
            result.append(Server(id=str(server_id), url=url if isinstance(url, str) else None))
        return result

    def _build_channels(self) -> list[Channel]:
        channels = self._document.get("channels")
        if not isinstance(channels, dict):
            return []
        v2 = self.major_version() == 2
        result: list[Channel] = []
        for channel_id, body in channels.items():
            body = body if isinstance(body, dict) else {}
            if v2:
                # In 2.x the channel key is its address.
                address: str | None = str(channel_id)
            else:
                raw = body.get("address", channel_id)
                address = raw if isinstance(raw, str) else None
            result.append(Channel(id=str(channel_id), address=address))
        return result

    def _build_operations(self) -> list[Operation]:
        if self.major_version() == 2:
            return self._build_v2_operations()

        operations = self._document.get("operations")
        if not isinstance(operations, dict):
            return []
        result: list[Operation] = []
        for operation_id, body in operations.items():
            body = body if isinstance(body, dict) else {}
            channel_ids: tuple[str, ...] = ()
            channel_id = self._channel_id_from_ref(body.get("channel"))
            if channel_id is not None:
                channel_ids = (channel_id,)
            action = body.get("action")
            result.append(
                Operation(
                    id=str(operation_id),
                    action=action if isinstance(action, str) else None,
                    channel_ids=channel_ids,
                )
            )
        return result

    def _build_v2_operations(self) -> list[Operation]:
        channels = self._document.get("channels")
        if not isinstance(channels, dict):
            return []
        result: list[Operation] = []
        for channel_id, body in channels.items():
            if not isinstance(body, dict):
                continue
            for action in _V2_ACTIONS:
                operation = body.get(action)
                if not isinstance(operation, dict):
                    continue
                operation_id = operation.get("operationId")
                if not isinstance(operation_id, str) or not operation_id:
                    operation_id = f"{channel_id}_{action}"
                result.append(
                    Operation(id=operation_id, action=action, channel_ids=(str(channel_id),))
                )
        return result

    @staticmethod
    def _channel_id_from_ref(reference: Any) -> str | None:
        if not isinstance(reference, dict):
            return None
        ref = reference.get("$ref")
        if not isinstance(ref, str) or not ref.startswith("#/"):
            return None
        tokens = split_pointer(ref[1:])
        if len(tokens) != 2 or tokens[0] != "channels":
            return None
        return tokens[1]
