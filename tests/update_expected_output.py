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

"""Re-render fixtures and update the expected output files.

Usage:
    python tests/update_expected_output.py                      # re-render all
    python tests/update_expected_output.py --fixture owncloud   # re-render one fixture
    python tests/update_expected_output.py --mode outbound      # re-render only outbound
    python tests/update_expected_output.py --fixture multi --target 2/lxc/0 --mode expose
"""

import argparse
import io
import sys
from pathlib import Path

# Allow running from the repo root without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'src'))

import natfabrik.core
from natfabrik.nat import ScriptMode
from natfabrik.platforms.iptables import NatDriver_ipt

TESTS_DIR = Path(__file__).resolve().parent
FIXTURES_DIR = TESTS_DIR / 'fixtures'
EXPECTED_OUTPUT_DIR = TESTS_DIR / 'expected-output'


def render(fixture_path: Path, target: str, mode: str) -> str | None:
    db = natfabrik.core.DatabaseManager()
    db.load(str(fixture_path))

    driver = NatDriver_ipt(db)
    driver.mode = mode
    driver.dry_run = True
    out = io.StringIO()
    if driver.run(target, out=out):
        print(
            f'  ERROR rendering {target} ({mode}): ' + '; '.join(driver.get_errors()),
            file=sys.stderr,
        )
        return None
    return out.getvalue()


def update_fixture(fixture_path: Path, mode: str, targets: list[str]) -> list[str]:
    """Re-render the given targets (or all existing files) of one fixture.

    Returns a list of updated file paths (relative to repo root).
    """
    out_dir = EXPECTED_OUTPUT_DIR / mode / fixture_path.stem
    if not targets:
        if not out_dir.exists():
            return []
        targets = [p.stem.replace('_', '/') for p in sorted(out_dir.glob('*.out'))]
    out_dir.mkdir(parents=True, exist_ok=True)

    updated = []
    for target in targets:
        output = render(fixture_path, target, mode)
        if output is None:
            continue
        path = out_dir / f'{target.replace("/", "_")}.out'
        if path.exists() and path.read_text() == output:
            continue
        path.write_text(output)
        rel = path.relative_to(TESTS_DIR.parent)
        updated.append(str(rel))
        print(f'  Updated: {rel}')
    return updated


def main():
    parser = argparse.ArgumentParser(
        description='Update expected output files for NAT script regression tests.',
    )
    parser.add_argument(
        '--fixture',
        default=None,
        help='Update only the named fixture (without extension).',
    )
    parser.add_argument(
        '--mode',
        choices=[m.value for m in ScriptMode],
        default=None,
        help='Update only the specified mode.',
    )
    parser.add_argument(
        '--target',
        action='append',
        default=[],
        help='Render this target (repeatable). Default: targets with an existing file.',
    )
    args = parser.parse_args()

    modes = [args.mode] if args.mode else [m.value for m in ScriptMode]

    if args.fixture:
        fixture = None
        for ext in ('.yml', '.yaml'):
            candidate = FIXTURES_DIR / f'{args.fixture}{ext}'
            if candidate.exists():
                fixture = candidate
                break
        if fixture is None:
            print(f'Fixture not found: {args.fixture}(.yml/.yaml)', file=sys.stderr)
            return 1
        fixtures = [fixture]
    else:
        fixtures = sorted(FIXTURES_DIR.glob('*.y*ml'))

    total = 0
    for mode in modes:
        print(f'Rendering expected output ({mode}):')
        for fixture in fixtures:
            total += len(update_fixture(fixture, mode, args.target))

    if total == 0:
        print('\nAll expected output files are up to date.')
    else:
        print(f'\n{total} expected output file(s) updated.')
    return 0


if __name__ == '__main__':
    sys.exit(main())
