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

"""Typed option schema with shared defaults.

``NatDefaults`` is the single source of truth for which options exist,
their types and their default values.  Values found in a snapshot file
are merged over the defaults with :meth:`NatDefaults.from_options`; the
command line tools then apply their own overrides with
:func:`dataclasses.replace`.
"""

import dataclasses
import logging

from natfabrik.core.options._keys import NatOption

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_COMMAND = "sh -c 'NATCMD=$(mktemp); cat >${NATCMD}; sudo sh -x ${NATCMD}'"


@dataclasses.dataclass(frozen=True)
class NatDefaults:
    """Default values for NAT script generation and installation."""

    # Script generation
    iptables_path: str = '/sbin/iptables'
    external_device: str = 'eth0'

    # Installation (0 means no timeout)
    ssh_user: str = 'ubuntu'
    ssh_args: str = ''
    ssh_timeout: int = 0
    remote_command: str = DEFAULT_REMOTE_COMMAND
    parallel_jobs: int = 1

    @classmethod
    def from_options(cls, options: dict | None) -> 'NatDefaults':
        """Build a NatDefaults from a raw options mapping.

        Unknown keys are ignored with a warning.  Integer fields accept
        numeric strings and must not be negative.
        """
        if not options:
            return cls()
        known = {key.value for key in NatOption}
        fields = {f.name: f for f in dataclasses.fields(cls)}
        values = {}
        for key, value in options.items():
            if key not in known:
                logger.warning('Ignoring unknown option %r', key)
                continue
            field = fields[key]
            if field.type in (int, 'int'):
                try:
                    number = int(value)
                except (TypeError, ValueError):
                    raise ValueError(f'option {key!r} must be an integer, got {value!r}') from None
                if number < 0:
                    raise ValueError(f'option {key!r} must not be negative, got {number}')
                values[field.name] = number
            else:
                values[field.name] = '' if value is None else str(value)
        return cls(**values)


NAT_DEFAULTS = NatDefaults()
