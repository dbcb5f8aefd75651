"""Configuration for z3_handles."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

LIBRARY_PATH_ENV = "Z3_LIBRARY_PATH"


@dataclass
class HandleConfig:
    """Process-wide defaults for library loading and context creation."""

    # Path to libz3 (file or directory); None searches the usual locations
    library_path: Optional[str] = field(
        default_factory=lambda: os.environ.get(LIBRARY_PATH_ENV) or None
    )

    # Z3 configuration parameters applied to every new context
    context_params: Dict[str, Any] = field(default_factory=dict)

    # Decimal digits used when rendering algebraic numbers
    decimal_precision: int = 10

    def merged_params(self, overrides: Dict[str, Any]) -> Dict[str, str]:
        """Combine default and per-context parameters as native strings."""
        params = dict(self.context_params)
        params.update(overrides)
        return {key: param_to_string(value) for key, value in params.items()}


def param_to_string(value: Any) -> str:
    """Render a parameter value the way Z3 expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# Global configuration instance
CONFIG = HandleConfig()
