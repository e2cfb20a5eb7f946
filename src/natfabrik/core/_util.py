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

"""Shared code for the snapshot reader.

Port spec parsing, accepted enum values, and the ParseResult dataclass.
"""

import dataclasses

from . import objects

PROTOCOLS = frozenset({'tcp', 'udp'})

ADDRESS_TYPES = {t.value: t for t in objects.AddressType}

NETWORK_SCOPES = {s.value: s for s in objects.NetworkScope}

MIN_PORT = 1
MAX_PORT = 65535


@dataclasses.dataclass
class ParseResult:
    """Holds the parsed object graph of one snapshot file."""

    environment: objects.Environment
    machine_count: int = 0
    unit_count: int = 0


def check_port_number(number: int) -> int:
    if not MIN_PORT <= number <= MAX_PORT:
        raise ValueError(f'port number out of range: {number}')
    return number


def parse_port_spec(spec) -> tuple[int, str]:
    """Parse ``80``, ``'80'`` or ``'80/tcp'`` into ``(number, protocol)``.

    The protocol defaults to ``tcp``.
    """
    if isinstance(spec, bool):
        raise ValueError(f'invalid port: {spec!r}')
    if isinstance(spec, int):
        return check_port_number(spec), 'tcp'
    number_str, _, protocol = str(spec).strip().partition('/')
    protocol = protocol.lower() or 'tcp'
    if protocol not in PROTOCOLS:
        raise ValueError(f'invalid port protocol in {spec!r}')
    try:
        number = int(number_str)
    except ValueError:
        raise ValueError(f'invalid port number in {spec!r}') from None
    return check_port_number(number), protocol
