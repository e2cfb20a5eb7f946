# Copyright (C) 2026 Linuxfabrik <info@linuxfabrik.ch>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# On Debian systems, the complete text of the GNU General Public License
# version 2 can be found in /usr/share/common-licenses/GPL-2.
#
# SPDX-License-Identifier: GPL-2.0-or-later

"""Address/network matching between a container and its gateway.

Which private network a container shares with its gateway is guessed from
the address strings alone: the host/gateway address pair with the longest
common leading run of characters wins (``10.0.3.151`` and ``10.0.3.1``
share ``10.0.3.1``).  No netmask arithmetic is involved, so two unrelated
networks with similar leading digits can be mistaken for one another, and
``10.0.3.1`` vs ``10.0.130.1`` only share ``10.0.``.  Routing decisions
depend on this ranking; keep it lexical.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from natfabrik.core.objects import AddressType, NetworkScope
from natfabrik.nat._errors import NoCommonNetwork
from natfabrik.nat._model import Address, Machine

logger = logging.getLogger(__name__)


def is_loopback(value: str) -> bool:
    return value.startswith('127.')


def greatest_common_prefix(s1: str, s2: str) -> str:
    n = 0
    for c1, c2 in zip(s1, s2):
        if c1 != c2:
            break
        n += 1
    return s1[:n]


def _network_candidates(machine: Machine) -> Iterator[str]:
    for addr in machine.addresses:
        # IPv4 only for now
        if addr.type != AddressType.IPv4 or is_loopback(addr.value):
            continue
        yield addr.value


def match_networks(host: Machine, gateway: Machine) -> tuple[str, str]:
    """Pick the (host address, gateway address) pair on a shared network.

    Raises NoCommonNetwork when no IPv4 pair shares a leading character.
    Ties keep the pair seen first.
    """
    best_prefix = ''
    best_host = ''
    best_gw = ''
    gateway_candidates = list(_network_candidates(gateway))
    for host_addr in _network_candidates(host):
        for gw_addr in gateway_candidates:
            prefix = greatest_common_prefix(host_addr, gw_addr)
            if len(prefix) > len(best_prefix):
                best_prefix = prefix
                best_host = host_addr
                best_gw = gw_addr
    if best_host and best_gw:
        logger.debug(
            'Matched %s (%s) with %s (%s) on prefix %r',
            host.id,
            best_host,
            gateway.id,
            best_gw,
            best_prefix,
        )
        return best_host, best_gw
    raise NoCommonNetwork(host.id, gateway.id)


def select_public_address(addresses: Iterable[Address]) -> str:
    """Return the most externally reachable address, or ``''``.

    The first public address wins.  Without one, the first cloud-local or
    unclassified address is used.  IPv6 and machine-local addresses are
    never selected.
    """
    fallback = ''
    for addr in addresses:
        if addr.type == AddressType.IPv6:
            continue
        if addr.scope == NetworkScope.Public:
            return addr.value
        if not fallback and addr.scope in (NetworkScope.CloudLocal, NetworkScope.Unknown):
            fallback = addr.value
    return fallback
