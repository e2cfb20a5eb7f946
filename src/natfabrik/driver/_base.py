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

"""BaseDriver: error/warning tracking for NAT drivers."""

from __future__ import annotations

import logging
import sys
from enum import IntEnum

logger = logging.getLogger(__name__)


class DriverStatus(IntEnum):
    """Driver exit status codes."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2


class BaseDriver:
    """Base class providing error/warning tracking for drivers."""

    def __init__(self) -> None:
        self._status: DriverStatus = DriverStatus.SUCCESS
        self._errors: list[str] = []
        self._warnings: list[str] = []
        self._unit_messages: dict[str, list[str]] = {}

    @property
    def status(self) -> DriverStatus:
        return self._status

    def error(self, subject_or_msg, msg: str | None = None) -> None:
        """Record an error, optionally associated with a unit or gateway."""
        text = self._record(subject_or_msg, msg)
        self._errors.append(text)
        logger.error('%s', text)
        self._status = DriverStatus.ERROR

    def warning(self, subject_or_msg, msg: str | None = None) -> None:
        """Record a warning, optionally associated with a unit or gateway."""
        text = self._record(subject_or_msg, msg)
        self._warnings.append(text)
        if self._status == DriverStatus.SUCCESS:
            self._status = DriverStatus.WARNING

    def _record(self, subject_or_msg, msg: str | None) -> str:
        if msg is None:
            return str(subject_or_msg)
        subject = str(subject_or_msg)
        text = f'{subject}: {msg}'
        self._unit_messages.setdefault(subject, []).append(msg)
        return text

    def info(self, msg: str) -> None:
        """Print an informational message to stderr."""
        print(msg, file=sys.stderr)

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def get_warnings(self) -> list[str]:
        return list(self._warnings)

    def get_messages_for(self, subject: str) -> list[str]:
        """Return errors and warnings recorded against *subject*."""
        return list(self._unit_messages.get(subject, []))
