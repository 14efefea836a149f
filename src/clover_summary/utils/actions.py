"""GitHub Actions integration: action inputs and workflow commands."""

from __future__ import annotations

import os
import sys
from typing import TextIO


def is_github_actions() -> bool:
    """Return True when running inside a GitHub Actions job."""
    return os.getenv("GITHUB_ACTIONS") == "true"


def input_env_name(name: str) -> str:
    """Return the environment variable GitHub Actions uses for input *name*."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str) -> str | None:
    """Return the stripped value of action input *name*, or ``None`` if unset or empty."""
    value = os.getenv(input_env_name(name), "").strip()
    return value or None


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` workflow command so the job is annotated as failed.

    Outside GitHub Actions the command is harmless text on stdout.
    """
    out = stream if stream is not None else sys.stdout
    out.write(f"::error::{_escape_data(message)}\n")
    out.flush()
