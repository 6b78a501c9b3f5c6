"""
Exception hierarchy for execx.

Errors raised by execx itself, as opposed to the exit errors it decorates.
The wrap and formatting core never raises; these cover the configuration
and command-line layers around it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ExecxError(Exception):
    """Base exception carrying structured error metadata."""

    message: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exit_code: int = 1

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ConfigError(ExecxError):
    """Raised when the settings file exists but cannot be used."""
