#!/usr/bin/env python3
"""
Development scripts for the chibi-kunai project.

Each command shells out to uv so checks run inside the project environment.
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

PACKAGE_DIR = "src/kunai/"


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and report whether it succeeded."""
    print(f"\n🔄 {description}: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        return False

    print(f"✅ {description} passed")
    return True


def run_all(commands: list[tuple[list[str], str]]) -> int:
    """Run every command, even after a failure, and return a process exit code."""
    results = [run_command(cmd, description) for cmd, description in commands]
    return 0 if all(results) else 1


def run_tests() -> int:
    """Run the unit tests."""
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    """Run ruff linting and format checks."""
    return run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )


def run_typecheck() -> int:
    """Run mypy and pyright over the package."""
    return run_all(
        [
            (["uv", "run", "mypy", PACKAGE_DIR], "MyPy type checking"),
            (["uv", "run", "pyright", PACKAGE_DIR], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run every demo script."""
    demo_files = sorted(p for p in Path("demo").glob("*.py") if not p.name.startswith("_"))
    if not demo_files:
        print("⚠️  No demo files found in demo directory")
        return 0
    return run_all([(["uv", "run", "python", str(p)], f"Demo: {p.name}") for p in demo_files])


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
}


def check_all() -> int:
    """Run tests, linting, type checking and demos, then print a summary."""
    results = {name: command() == 0 for name, command in COMMANDS.items()}

    print(f"\n{'=' * 20} SUMMARY {'=' * 20}")
    for name, passed in results.items():
        print(f"{name:<15} {'✅ PASS' if passed else '❌ FAIL'}")

    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    available = ", ".join([*COMMANDS, "check"])
    if len(sys.argv) != 2:
        print(f"Usage: python scripts.py <command>  ({available})")
        sys.exit(1)

    command = sys.argv[1]
    if command == "check":
        sys.exit(check_all())
    if command not in COMMANDS:
        print(f"Unknown command: {command}. Available commands: {available}")
        sys.exit(1)
    sys.exit(COMMANDS[command]())
