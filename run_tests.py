#!/usr/bin/env python3
"""
Test runner for the Student Registry service.

Usage:
    python run_tests.py                           # Run all tests
    python run_tests.py -k test_partial_update    # Run specific test pattern
    python run_tests.py --cov                     # Run with coverage
    python run_tests.py --api                     # Run HTTP API tests only
"""

import sys
import subprocess
from pathlib import Path


def run_tests(args=None, targets=None):
    """Run tests with pytest."""
    if args is None:
        args = []

    cmd = [sys.executable, "-m", "pytest", *(targets or ["tests"]), "-v", "--tb=short"]
    cmd.extend(args)

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Run tests for the student registry")
    parser.add_argument("-k", "--keyword", help="Run tests matching keyword")
    parser.add_argument("--cov", action="store_true", help="Run with coverage")
    parser.add_argument("--api", action="store_true", help="Run HTTP API tests only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--pdb", action="store_true", help="Drop into debugger on failure")

    args = parser.parse_args()

    pytest_args = []
    targets = ["tests/test_students_api.py"] if args.api else None

    if args.keyword:
        pytest_args.extend(["-k", args.keyword])

    if args.cov:
        pytest_args.extend(
            [
                "--cov=student_registry",
                "--cov-report=html",
                "--cov-report=term-missing",
            ]
        )

    if args.verbose:
        pytest_args.append("-vv")

    if args.pdb:
        pytest_args.append("--pdb")

    return run_tests(pytest_args, targets)


if __name__ == "__main__":
    sys.exit(main())
