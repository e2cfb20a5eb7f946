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

"""Script installation on gateway machines over SSH."""

from __future__ import annotations

import logging
import subprocess

from natfabrik.core.options import NAT_DEFAULTS, NatDefaults
from natfabrik.nat import ExecutionError

logger = logging.getLogger(__name__)


class SshExecutor:
    """Pipe a generated script into a remote shell on the gateway.

    The script is fed on stdin to ``remote_command``, which by default
    stores it in a temporary file and runs it through ``sudo sh -x``.
    """

    def __init__(self, config: NatDefaults = NAT_DEFAULTS) -> None:
        self._config = config

    def pack_ssh_args(self, address: str) -> list[str]:
        """Build SSH command line arguments."""
        args = [
            'ssh',
            '-o',
            'ServerAliveInterval=30',
        ]
        if self._config.ssh_args:
            args.extend(self._config.ssh_args.split())
        args.extend(['-l', self._config.ssh_user, address, self._config.remote_command])
        return args

    def execute(self, address: str, script: str) -> str:
        """Run *script* on *address* and return the remote output."""
        args = self.pack_ssh_args(address)
        logger.debug('$ %s', ' '.join(args))
        timeout = self._config.ssh_timeout or None
        try:
            proc = subprocess.run(
                args,
                input=script,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                f'{address}: timed out after {e.timeout} seconds'
            ) from e
        except OSError as e:
            raise ExecutionError(f'{address}: {e}') from e

        if proc.stdout:
            logger.info('%s', proc.stdout.rstrip())
        if proc.returncode != 0:
            detail = (proc.stderr or '').strip()
            msg = f'{address}: ssh exited with code {proc.returncode}'
            if detail:
                msg = f'{msg}: {detail}'
            raise ExecutionError(msg)
        return proc.stdout
