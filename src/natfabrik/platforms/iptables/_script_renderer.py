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

"""ScriptRenderer_ipt: assembles per-gateway iptables shell scripts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from natfabrik.core.options import NAT_DEFAULTS
from natfabrik.driver._jinja2_template import Jinja2Template
from natfabrik.nat import Forward, ScriptMode
from natfabrik.platforms.iptables._print_rule import NATPrintRule

SCRIPT_TEMPLATE = 'nat_script.sh.j2'


class ScriptRenderer_ipt:
    """Render Forward plans into ``#!/bin/sh`` iptables scripts.

    Output depends only on the constructor arguments and the forwards
    passed in, so rendering the same input twice yields identical text.
    """

    def __init__(
        self,
        mode: ScriptMode = ScriptMode.EXPOSE,
        clear: bool = False,
        iptables: str = NAT_DEFAULTS.iptables_path,
    ) -> None:
        self.mode = ScriptMode(mode)
        self.clear = clear
        self.print_rule = NATPrintRule(iptables)
        self._template = Jinja2Template('iptables', SCRIPT_TEMPLATE)

    def _block(self, fwd: Forward) -> list[str]:
        if self.mode == ScriptMode.OUTBOUND:
            return self.print_rule.outbound(fwd)
        return self.print_rule.expose(fwd)

    def render(self, forwards: Iterable[Forward]) -> str:
        """Render one script containing a block per forward, in order."""
        return self._template.render(
            {
                'clear': self.clear,
                'flush': self.print_rule.flush(),
                'blocks': [self._block(fwd) for fwd in forwards],
            }
        )

    def render_grouped(
        self, grouped: Mapping[str, Iterable[Forward]]
    ) -> dict[str, str]:
        """Render one script per gateway id, keeping the mapping's order."""
        return {gw_id: self.render(fwds) for gw_id, fwds in grouped.items()}
