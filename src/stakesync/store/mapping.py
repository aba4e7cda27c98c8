"""Field mapping applied to every new account index generation."""

from typing import Any

from stakesync.domain.enums import StakeAttribute


def stake_mapping() -> dict[str, Any]:
    """Exact stake values are keywords, float companions are doubles."""
    properties: dict[str, Any] = {}
    for attr in StakeAttribute:
        properties[attr.value] = {"type": "keyword"}
        properties[attr.num_key] = {"type": "double"}
    return {"properties": properties}
