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

"""IPTables platform: print rules, script renderer and driver."""

from natfabrik.platforms.iptables._nat_driver import NatDriver_ipt
from natfabrik.platforms.iptables._print_rule import NATPrintRule
from natfabrik.platforms.iptables._script_renderer import ScriptRenderer_ipt

__all__ = [
    'NATPrintRule',
    'NatDriver_ipt',
    'ScriptRenderer_ipt',
]
