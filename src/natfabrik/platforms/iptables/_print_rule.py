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

"""NATPrintRule: iptables command generation for Forward plans.

Produces plain shell commands (one per line, no trailing newline) in the
``iptables`` CLI syntax.  Ordering of the returned lists is the order the
commands must appear in the script.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from natfabrik.core.options import NAT_DEFAULTS

if TYPE_CHECKING:
    from natfabrik.nat import Forward, Port


class NATPrintRule:
    """Generates iptables shell commands from Forward plans."""

    def __init__(self, iptables: str = NAT_DEFAULTS.iptables_path) -> None:
        self.iptables = iptables

    def flush(self) -> list[str]:
        """Flush the filter and nat tables."""
        return [
            f'{self.iptables} -F',
            f'{self.iptables} -F -t nat',
        ]

    def dnat(self, fwd: Forward, port: Port) -> str:
        return (
            f'{self.iptables} -t nat -A PREROUTING'
            f' -p {port.protocol}'
            f' -i {fwd.external_gateway_device}'
            f' -d {fwd.external_gateway_addr}'
            f' --dport {fwd.external_port(port)}'
            f' -j DNAT --to {fwd.internal_host_addr}:{port.number}'
        )

    def accept(self, fwd: Forward, port: Port) -> str:
        return (
            f'{self.iptables} -A FORWARD'
            f' -p {port.protocol}'
            f' -i {fwd.external_gateway_device}'
            f' -d {fwd.external_gateway_addr}'
            f' --dport {fwd.external_port(port)}'
            f' -j ACCEPT'
        )

    def snat(self, fwd: Forward) -> str:
        return (
            f'{self.iptables} -t nat -A POSTROUTING'
            f' -s {fwd.internal_host_addr}'
            f' -o {fwd.external_gateway_device}'
            f' -j SNAT --to {fwd.external_gateway_addr}'
        )

    def expose(self, fwd: Forward) -> list[str]:
        """DNAT and FORWARD accept per port, then one SNAT for the host."""
        lines: list[str] = []
        for port in fwd.internal_ports:
            lines.append(self.dnat(fwd, port))
            lines.append(self.accept(fwd, port))
        lines.append(self.snat(fwd))
        return lines

    def outbound(self, fwd: Forward) -> list[str]:
        return [self.snat(fwd)]
