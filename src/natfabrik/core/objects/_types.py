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

"""Non-ORM value types shared by the models, the reader and the NAT engine."""

import enum
import ipaddress


class AddressType(enum.StrEnum):
    """Address family of a machine address."""

    IPv4 = 'ipv4'
    IPv6 = 'ipv6'
    Hostname = 'hostname'


class NetworkScope(enum.StrEnum):
    """How widely an address is reachable.

    ``Unknown`` is used when the state provider does not classify an
    address; public address selection treats it like ``CloudLocal``.
    """

    Unknown = ''
    Public = 'public'
    CloudLocal = 'local-cloud'
    MachineLocal = 'local-machine'


def derive_address_type(value: str) -> AddressType:
    """Classify *value* as IPv4, IPv6 or hostname."""
    try:
        ip = ipaddress.ip_address(value)
    except ValueError:
        return AddressType.Hostname
    if ip.version == 4:
        return AddressType.IPv4
    return AddressType.IPv6
