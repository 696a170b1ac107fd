"""
Multicast Config — Settings
==============================
Frozen configuration objects. Validated on construction, never
mutated afterwards. Components built without a config use defaults.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_LOGGER_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


# ══════════════════════════════════════════════════════════════
# DELEGATE CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DelegateConfig:
    """
    Behaviour switches for MulticastDelegate.

    cache_resolutions: memoise method resolution per
        (capability, method name, argument types).
    numeric_tower: let int satisfy float parameters and int/float
        satisfy complex parameters, as PEP 484 does.
    """

    cache_resolutions: bool = True
    numeric_tower: bool = True

    def __post_init__(self) -> None:
        for name in ("cache_resolutions", "numeric_tower"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool.")


# ══════════════════════════════════════════════════════════════
# DIAGNOSTICS CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Settings for the Log facade and the logging-backed writer.

    logger_prefix: parent logger name; each tag logs to
        "<logger_prefix>.<tag>".
    swallow_errors: a writer that raises is reported and skipped
        instead of failing the caller.
    """

    logger_prefix: str = "multicast"
    swallow_errors: bool = True

    def __post_init__(self) -> None:
        if not self.logger_prefix or not _LOGGER_NAME.match(self.logger_prefix):
            raise ValueError(
                f"logger_prefix must be a dotted logger name, "
                f"got {self.logger_prefix!r}."
            )
        if not isinstance(self.swallow_errors, bool):
            raise TypeError("swallow_errors must be a bool.")

    def logger_name(self, tag: str) -> str:
        """Logger name for a tag. Empty tags log to the prefix itself."""
        tag = tag.strip(".") if tag else ""
        return f"{self.logger_prefix}.{tag}" if tag else self.logger_prefix
