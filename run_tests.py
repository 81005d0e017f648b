#!/usr/bin/env python3
"""
Test runner for the magpie-config package.
"""

import argparse
import subprocess
import sys

TEST_DIRS = {"unit": "tests/unit/", "cli": "tests/cli/", "all": "tests/"}


def run_command(cmd, description):
    """Run a command and report whether it succeeded."""
    print(f"\n{description}")
    print(f"Running: {' '.join(cmd)}")
    print("-" * 50)

    result = subprocess.run(cmd, capture_output=False)
    if result.returncode != 0:
        print(f" {description} failed with exit code {result.returncode}")
        return False
    print(f"{description} completed successfully")
    return True


def main():
    parser = argparse.ArgumentParser(description="Run magpie-config tests")
    parser.add_argument("--type", choices=sorted(TEST_DIRS), default="all", help="Tests to run")
    parser.add_argument("--coverage", action="store_true", help="Coverage report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("-k", dest="keyword", help="Only run tests matching this expression")
    args = parser.parse_args()

    cmd = [sys.executable, "-m", "pytest", TEST_DIRS[args.type]]
    if args.coverage:
        cmd.extend(["--cov=magpie_config", "--cov-report=term-missing"])
    if args.verbose:
        cmd.append("-v")
    if args.keyword:
        cmd.extend(["-k", args.keyword])

    success = run_command(cmd, f"Running {args.type} tests")
    print("\n" + "=" * 50)
    print(" All tests passed" if success else " Some tests failed, see output above")
    print("=" * 50)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
