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

"""Driver infrastructure for NAT script generation and installation."""

from ._base import BaseDriver, DriverStatus
from ._jinja2_template import Jinja2Template
from ._nat_driver import NatDriver
from ._remote import SshExecutor

__all__ = [
    'BaseDriver',
    'DriverStatus',
    'Jinja2Template',
    'NatDriver',
    'SshExecutor',
]
