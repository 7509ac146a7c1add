"""
models.py

The decoded stake overrides document.
"""

import ipaddress
from types import MappingProxyType
from typing import Annotated, Any, Dict, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    IPvAnyAddress,
    StrictBool,
    StrictInt,
    field_validator,
)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

MAX_STAKE = 2**64 - 1

Stake = Annotated[StrictInt, Field(ge=0, le=MAX_STAKE)]


class StakedNodesOverrides(BaseModel):
    """
    One complete load of the overrides source.

    ``stake_map`` is stored read-only so a published instance can be handed
    to any number of reader threads without copying. Unknown top-level
    keys in the document are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    auto_reload: StrictBool = False
    stake_map: Dict[IPvAnyAddress, Stake] = Field(default_factory=dict, validate_default=True)

    @field_validator("stake_map", mode="before")
    @classmethod
    def _check_addresses(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value

        seen = set()
        for key in value:
            # IPvAnyAddress would also accept a bare integer
            if not isinstance(key, (str, ipaddress.IPv4Address, ipaddress.IPv6Address)):
                raise ValueError(f"stake_map key must be an IP address string, got: {key!r}")
            try:
                addr = ipaddress.ip_address(key)
            except ValueError:
                continue
            if addr in seen:
                raise ValueError(f"Duplicate address in stake_map: {addr}")
            seen.add(addr)
        return value

    @field_validator("stake_map", mode="after")
    @classmethod
    def _freeze_map(cls, value: Dict[IPAddress, int]) -> Any:
        return MappingProxyType(dict(value))

    def to_dict(self) -> dict:
        """Plain, JSON-friendly view with addresses rendered as text."""
        return {
            "auto_reload": self.auto_reload,
            "stake_map": {str(addr): stake for addr, stake in self.stake_map.items()},
        }
