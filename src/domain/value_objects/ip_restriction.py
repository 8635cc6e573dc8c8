"""Network allow-list attached to an API key.

Entries may be exact addresses ("203.0.113.7") or CIDR blocks
("10.0.0.0/8", "2001:db8::/32"), mixed freely. Matching is range containment
on parsed addresses, so "10.0.0.1" never matches "10.0.0.10".

Usage:
    restriction = IpRestriction.parse(["10.0.0.0/8", "203.0.113.7"])
    restriction.allows("10.1.2.3")  # True
"""

import ipaddress
from dataclasses import dataclass

type IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


@dataclass(frozen=True, slots=True)
class IpRestriction:
    """Parsed allow-list. An empty list allows every address."""

    networks: tuple[IPNetwork, ...] = ()

    @classmethod
    def parse(cls, entries: list[str] | None) -> "IpRestriction":
        """Parse allow-list entries.

        An exact address becomes a single-host network (/32 or /128).

        Raises:
            ValueError: If an entry is neither an address nor a network.
        """
        networks = tuple(
            ipaddress.ip_network(entry.strip(), strict=False)
            for entry in entries or []
            if entry.strip()
        )
        return cls(networks=networks)

    @property
    def is_restricted(self) -> bool:
        return bool(self.networks)

    def allows(self, address: str | None) -> bool:
        """Whether ``address`` may use the key.

        An unknown or unparsable address is rejected when any restriction
        exists.
        """
        if not self.networks:
            return True
        if not address:
            return False
        try:
            ip = ipaddress.ip_address(address.strip())
        except ValueError:
            return False
        # IPv4-mapped IPv6 peers ("::ffff:10.0.0.1") match IPv4 entries
        if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
            ip = ip.ipv4_mapped
        return any(ip.version == net.version and ip in net for net in self.networks)
