"""
snapshot.py

Process-wide slot holding the most recently loaded stake overrides.

The slot stores a single immutable ``StakedNodesOverrides`` value, so the
map and the ``auto_reload`` flag are always swapped together. Readers never
see a map from one load paired with the flag from another.
"""

import ipaddress
import threading
from typing import Optional, Union

from .models import IPAddress, StakedNodesOverrides


class SharedOverrides:
    """Lock-guarded holder of the current overrides; one writer, many readers."""

    def __init__(self, initial: Optional[StakedNodesOverrides] = None):
        self._lock = threading.Lock()
        self._current = initial if initial is not None else StakedNodesOverrides()

    def read(self) -> StakedNodesOverrides:
        """Return the current overrides. The returned value never changes."""
        with self._lock:
            return self._current

    def publish(self, overrides: StakedNodesOverrides) -> None:
        """Replace the current overrides in one step."""
        with self._lock:
            self._current = overrides

    def stake_for(self, address: Union[str, IPAddress]) -> Optional[int]:
        """Override weight for ``address``, or ``None`` when it has none."""
        if isinstance(address, str):
            address = ipaddress.ip_address(address)
        return self.read().stake_map.get(address)

    @property
    def auto_reload(self) -> bool:
        return self.read().auto_reload
