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

"""NatDriver_ipt: NAT driver for the iptables platform."""

from __future__ import annotations

from collections.abc import Mapping

from natfabrik.driver._nat_driver import NatDriver
from natfabrik.nat import Forward
from natfabrik.platforms.iptables._script_renderer import ScriptRenderer_ipt


class NatDriver_ipt(NatDriver):
    """Renders ``#!/bin/sh`` iptables scripts for each gateway."""

    def create_renderer(self) -> ScriptRenderer_ipt:
        return ScriptRenderer_ipt(
            mode=self.mode,
            clear=self.clear,
            iptables=self.config.iptables_path,
        )

    def render(self, grouped: Mapping[str, list[Forward]]) -> dict[str, str]:
        return self.create_renderer().render_grouped(grouped)
