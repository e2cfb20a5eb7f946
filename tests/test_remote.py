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

"""Tests for the SSH executor; ``subprocess.run`` is replaced by a recorder."""

import dataclasses
import subprocess

import pytest

from natfabrik.core.options import DEFAULT_REMOTE_COMMAND, NAT_DEFAULTS
from natfabrik.driver import SshExecutor
from natfabrik.nat import ExecutionError


class _Recorder:
    def __init__(self, returncode=0, stdout='', stderr='', exc=None):
        self.calls = []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.exc = exc

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(args, self.returncode, self.stdout, self.stderr)


@pytest.fixture()
def recorder(monkeypatch):
    rec = _Recorder()
    monkeypatch.setattr(subprocess, 'run', rec)
    return rec


def test_pack_ssh_args_defaults():
    assert SshExecutor().pack_ssh_args('192.168.122.107') == [
        'ssh',
        '-o',
        'ServerAliveInterval=30',
        '-l',
        'ubuntu',
        '192.168.122.107',
        DEFAULT_REMOTE_COMMAND,
    ]


def test_pack_ssh_args_extra_args():
    config = dataclasses.replace(NAT_DEFAULTS, ssh_user='admin', ssh_args='-p 2222 -i key')
    args = SshExecutor(config).pack_ssh_args('203.0.113.10')
    assert args[:7] == ['ssh', '-o', 'ServerAliveInterval=30', '-p', '2222', '-i', 'key']
    assert args[7:10] == ['-l', 'admin', '203.0.113.10']


def test_execute_pipes_script(recorder):
    recorder.stdout = '+ /sbin/iptables -F\n'
    out = SshExecutor().execute('192.168.122.107', '#!/bin/sh\n')
    assert out == '+ /sbin/iptables -F\n'
    args, kwargs = recorder.calls[0]
    assert args[-2:] == ['192.168.122.107', DEFAULT_REMOTE_COMMAND]
    assert kwargs['input'] == '#!/bin/sh\n'
    assert kwargs['timeout'] is None


def test_execute_timeout_option(recorder):
    SshExecutor(dataclasses.replace(NAT_DEFAULTS, ssh_timeout=30)).execute('h', '')
    assert recorder.calls[0][1]['timeout'] == 30


def test_execute_non_zero_exit(recorder):
    recorder.returncode = 255
    recorder.stderr = 'Permission denied (publickey).\n'
    with pytest.raises(ExecutionError, match=r'exited with code 255: Permission denied'):
        SshExecutor().execute('192.168.122.107', '#!/bin/sh\n')


def test_execute_timeout(recorder):
    recorder.exc = subprocess.TimeoutExpired(['ssh'], 5)
    with pytest.raises(ExecutionError, match='timed out after 5 seconds'):
        SshExecutor().execute('192.168.122.107', '#!/bin/sh\n')


def test_execute_missing_ssh_binary(recorder):
    recorder.exc = FileNotFoundError(2, 'No such file or directory', 'ssh')
    with pytest.raises(ExecutionError):
        SshExecutor().execute('192.168.122.107', '#!/bin/sh\n')
