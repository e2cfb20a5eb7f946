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

"""
SQLAlchemy 2.0 ORM models for the environment state snapshot.
"""

# Import all submodules so every ORM class registers on the shared Base.metadata.
from ._base import (
    Base,
    enable_sqlite_fks,
)
from ._environment import Environment
from ._machines import (
    Address,
    Machine,
)
from ._services import (
    Port,
    Service,
    Unit,
)
from ._types import (
    AddressType,
    NetworkScope,
    derive_address_type,
)

__all__ = [
    'Address',
    'AddressType',
    'Base',
    'Environment',
    'Machine',
    'NetworkScope',
    'Port',
    'Service',
    'Unit',
    'derive_address_type',
    'enable_sqlite_fks',
]
