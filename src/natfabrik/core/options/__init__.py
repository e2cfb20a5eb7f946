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

"""Typed option keys and schema for NAT script generation.

This module provides:

- **StrEnum keys**: Type-safe option key names that work as dict keys
- **Dataclass schema**: Typed defaults shared between the snapshot file and the command line tools
"""

from natfabrik.core.options._keys import NatOption
from natfabrik.core.options._schemas import (
    DEFAULT_REMOTE_COMMAND,
    NAT_DEFAULTS,
    NatDefaults,
)

__all__ = [
    'DEFAULT_REMOTE_COMMAND',
    'NAT_DEFAULTS',
    'NatDefaults',
    'NatOption',
]
