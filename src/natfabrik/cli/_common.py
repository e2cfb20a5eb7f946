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

"""Argument parsing and run loop shared by the natfabrik command line tools."""

import argparse
import logging
import sys
import time

import natfabrik
import natfabrik.core
from natfabrik.nat import InvalidPortMapping, InvalidTarget, Target, parse_port_mappings

__author__ = 'Linuxfabrik GmbH, Zurich/Switzerland'

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser(prog, description):
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
    )

    parser.add_argument(
        'target',
        help='unit name (e.g. owncloud/0) or machine id (e.g. 0/lxc/2) to configure',
    )

    parser.add_argument(
        '-f',
        '--file',
        required=True,
        dest='FILE',
        help='path to the .yml environment snapshot',
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        dest='DRY_RUN',
        help='show the NAT routing commands, but do not execute them',
    )

    parser.add_argument(
        '--clear',
        action='store_true',
        dest='CLEAR',
        help='flush all existing filter and nat rules first',
    )

    parser.add_argument(
        '--device',
        default=None,
        dest='DEVICE',
        help='external network device on the gateway. Default: snapshot option, else eth0',
    )

    parser.add_argument(
        '-j',
        '--jobs',
        type=int,
        default=None,
        dest='JOBS',
        help='number of gateways to configure in parallel. Default: 1',
    )

    parser.add_argument(
        '-v',
        '--verbose',
        action='count',
        default=0,
        dest='VERBOSE',
        help='verbose output (repeat for higher verbosity)',
    )

    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s: v{natfabrik.__version__} by {__author__}',
    )

    return parser


def setup_logging(verbose):
    level = LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def run(args, mode, port_mappings=None):
    """Load the snapshot named by *args* and run the iptables NAT driver."""
    setup_logging(args.VERBOSE)
    t_start = time.monotonic()

    try:
        target = Target.parse(args.target)
        port_map = parse_port_mappings(port_mappings)
    except (InvalidTarget, InvalidPortMapping) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    print(f'Loading environment from {args.FILE} ...', file=sys.stderr)

    try:
        db = natfabrik.core.DatabaseManager()
        db.load(args.FILE)
    except Exception as e:
        print(f'Error: failed to load environment from {args.FILE}: {e}', file=sys.stderr)
        return 1

    from natfabrik.platforms.iptables import NatDriver_ipt

    driver = NatDriver_ipt(db)
    driver.mode = mode
    driver.dry_run = args.DRY_RUN
    driver.clear = args.CLEAR
    driver.port_map = port_map
    if args.DEVICE is not None:
        driver.overrides['external_device'] = args.DEVICE
    if args.JOBS is not None:
        driver.overrides['parallel_jobs'] = args.JOBS

    try:
        driver.prepare()
    except ValueError as e:
        print(f'Error: invalid environment {args.FILE}: {e}', file=sys.stderr)
        return 1

    print(f'Planning {mode} rules for {target.name} ...', file=sys.stderr)
    result = driver.run(target)

    for warn in driver.get_warnings():
        print(f'Warning: {warn}', file=sys.stderr)
    for err in driver.get_errors():
        print(f'Error: {err}', file=sys.stderr)

    elapsed = time.monotonic() - t_start
    print(f'Run time: {elapsed:.2f}s', file=sys.stderr)

    return result
