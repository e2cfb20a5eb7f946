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

"""Canonical option key definitions using StrEnum.

The keys are used in the ``options:`` mapping of a snapshot file and by
the command line tools when they override a value.

Example:
    from natfabrik.core.options import NatOption

    device = options.get(NatOption.EXTERNAL_DEVICE, 'eth0')
"""

from enum import StrEnum


class NatOption(StrEnum):
    """Option keys controlling script generation and installation."""

    # Script generation
    IPTABLES_PATH = 'iptables_path'
    EXTERNAL_DEVICE = 'external_device'

    # Installation over SSH
    SSH_USER = 'ssh_user'
    SSH_ARGS = 'ssh_args'
    SSH_TIMEOUT = 'ssh_timeout'
    REMOTE_COMMAND = 'remote_command'
    PARALLEL_JOBS = 'parallel_jobs'
