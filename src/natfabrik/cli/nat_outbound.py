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

"""CLI entry point: route container traffic out through the gateway machine."""

import sys

from natfabrik.cli import _common
from natfabrik.nat import ScriptMode

DESCRIPTION = """Configure source NAT on the gateway machine of a containerized unit, so that
the container reaches the outside world through the gateway's public address."""


def parse_args(argv=None):
    parser = _common.build_parser('natfabrik-outbound', DESCRIPTION)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    return _common.run(args, ScriptMode.OUTBOUND)


if __name__ == '__main__':
    sys.exit(main())
