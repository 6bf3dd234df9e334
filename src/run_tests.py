#!/usr/bin/env python3
"""
Run All Tests
=============

Test runner for core_algebra and omega. Works from any location:
    python3 src/run_tests.py
    python3 src/run_tests.py omega --fast

Suites:
    core  - tests/core  (algebra contract, operators, polyhedral)
    omega - tests/omega (strata, bounds, fan filter, gfan bridge)
    all   - both (default)

--fast skips tests marked slow (worker pools).
"""

import os
import subprocess
import sys
from pathlib import Path

SUITES = {
    'all': ['tests/'],
    'core': ['tests/core/'],
    'omega': ['tests/omega/'],
}


def main(argv=None):
    """Run the selected suite and return pytest's exit code."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the test suite")
    parser.add_argument('suite', nargs='?', choices=sorted(SUITES), default='all')
    parser.add_argument('--fast', action='store_true', help='Skip tests marked slow')
    parser.add_argument('-k', dest='keyword', default=None, help='pytest -k expression')
    args = parser.parse_args(argv)

    src_root = Path(__file__).parent.resolve()

    env = os.environ.copy()
    pythonpath = env.get('PYTHONPATH', '')
    env['PYTHONPATH'] = f"{src_root}{os.pathsep}{pythonpath}" if pythonpath else str(src_root)

    cmd = [sys.executable, '-m', 'pytest', *SUITES[args.suite], '-v', '--tb=short']
    if args.fast:
        cmd += ['-m', 'not slow']
    if args.keyword:
        cmd += ['-k', args.keyword]

    result = subprocess.run(cmd, cwd=src_root, env=env)
    return result.returncode


if __name__ == '__main__':
    sys.exit(main())
