"""Parser configuration.

Settings can be built directly or read from the environment::

    KICAD_PCB_STRICT_LAYERS=1      reject layer names outside the canonical set
    KICAD_PCB_CHECK_CONSISTENCY=0  skip the post-parse consistency warnings
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUTHY | _FALSY)}, got {raw!r}")


@dataclass(frozen=True)
class ParserConfig:
    """Options that change how a board is read."""

    strict_layers: bool = False
    """Validate layer references against the canonical KiCad layer set."""

    check_consistency: bool = True
    """Log non-fatal consistency issues after a board is parsed."""

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Build a config from KICAD_PCB_* environment variables."""
        return cls(
            strict_layers=_env_flag("KICAD_PCB_STRICT_LAYERS", False),
            check_consistency=_env_flag("KICAD_PCB_CHECK_CONSISTENCY", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "strict_layers": self.strict_layers,
            "check_consistency": self.check_consistency,
        }
