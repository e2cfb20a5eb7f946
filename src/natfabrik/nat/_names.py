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

"""Machine id and unit name syntax.

Container machines are named after the machine hosting them:
``0/lxc/2`` is the second LXC container on machine ``0``, and
``0/lxc/2/kvm/0`` is nested one level deeper.
"""

import re

_NUMBER = r'(?:0|[1-9][0-9]*)'
_CONTAINER_TYPE = r'[a-z]+[a-z0-9]*'
_SERVICE = r'[a-z][a-z0-9]*(?:-[a-z0-9]*[a-z][a-z0-9]*)*'

_MACHINE_RE = re.compile(rf'^{_NUMBER}(?:/{_CONTAINER_TYPE}/{_NUMBER})*$')
_UNIT_RE = re.compile(rf'^{_SERVICE}/{_NUMBER}$')


def is_machine_id(value: str) -> bool:
    return bool(_MACHINE_RE.fullmatch(value))


def is_unit_name(value: str) -> bool:
    return bool(_UNIT_RE.fullmatch(value))


def parent_id(machine_id: str) -> str | None:
    """Return the id of the machine hosting *machine_id*.

    Strips the trailing ``/<container-type>/<n>`` pair.  Top-level
    machines have no parent and yield None.
    """
    parts = machine_id.split('/')
    if len(parts) < 3:
        return None
    return '/'.join(parts[:-2])
