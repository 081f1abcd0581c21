"""Resource types a headless browser can be told not to load."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class ResourceType(str, Enum):
    """Individual resource types."""

    IMAGE = "image"
    MEDIA = "media"
    FONT = "font"
    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    RAW = "raw"  # XHR / fetch
    SVG = "svg"
    POPUP = "popup"
    PING = "ping"
    WEBSOCKET = "websocket"


RESOURCE_GROUPS: dict[str, frozenset[ResourceType]] = {
    "visual": frozenset({ResourceType.IMAGE, ResourceType.MEDIA, ResourceType.SVG}),
    "style": frozenset({ResourceType.STYLESHEET, ResourceType.FONT}),
    "active": frozenset({ResourceType.SCRIPT, ResourceType.POPUP}),
    "network": frozenset({ResourceType.RAW, ResourceType.WEBSOCKET, ResourceType.PING}),
    # Scripts, XHR, websockets and stylesheets stay: SPAs need them to render
    "nonessential": frozenset(
        {
            ResourceType.IMAGE,
            ResourceType.MEDIA,
            ResourceType.SVG,
            ResourceType.FONT,
            ResourceType.PING,
            ResourceType.POPUP,
        }
    ),
    "all": frozenset(ResourceType),
}

# Playwright request.resource_type values for each type.
# Popups and SVG documents have no request type of their own.
PLAYWRIGHT_RESOURCE_TYPES: dict[ResourceType, frozenset[str]] = {
    ResourceType.IMAGE: frozenset({"image"}),
    ResourceType.MEDIA: frozenset({"media"}),
    ResourceType.FONT: frozenset({"font"}),
    ResourceType.STYLESHEET: frozenset({"stylesheet"}),
    ResourceType.SCRIPT: frozenset({"script"}),
    ResourceType.RAW: frozenset({"xhr", "fetch", "eventsource"}),
    ResourceType.SVG: frozenset(),
    ResourceType.POPUP: frozenset(),
    ResourceType.PING: frozenset({"ping", "beacon"}),
    ResourceType.WEBSOCKET: frozenset({"websocket"}),
}


def parse_resource_types(names: Iterable[str]) -> frozenset[ResourceType]:
    """
    Parse resource type and group names (case-insensitive).

    Args:
        names: Names such as "image", "font" or groups like "nonessential"

    Returns:
        Union of the named types

    Raises:
        ValueError: If a name is neither a type nor a group
    """
    types: set[ResourceType] = set()
    for name in names:
        lowered = name.strip().lower()
        if lowered in RESOURCE_GROUPS:
            types |= RESOURCE_GROUPS[lowered]
            continue
        try:
            types.add(ResourceType(lowered))
        except ValueError:
            valid = sorted([t.value for t in ResourceType] + list(RESOURCE_GROUPS))
            raise ValueError(f"Unknown resource type: {name!r}. Use one of: {', '.join(valid)}") from None
    return frozenset(types)


def playwright_resource_types(types: Iterable[ResourceType]) -> frozenset[str]:
    """Map resource types to the Playwright request types to abort."""
    result: set[str] = set()
    for resource_type in types:
        result |= PLAYWRIGHT_RESOURCE_TYPES[resource_type]
    return frozenset(result)
