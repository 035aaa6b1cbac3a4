from __future__ import annotations

import os
from typing import Final

"""
This module defines numerical guards and process-wide defaults shared across the game core. It includes ZERO_SPEED for deciding when a merged velocity has no usable direction, the rotational sense used for spawn orbits, and the logging level and format with environment variable override support (ACCRETION_LOG_LEVEL, ACCRETION_LOG_FORMAT). The module provides centralized constant management with sensible defaults while allowing runtime configuration through environment variables.


"""




def _parse_level(default: str = "INFO") -> str:
	env_val = os.getenv("ACCRETION_LOG_LEVEL", "")
	if env_val.strip() != "":
		if env_val.strip().upper() in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
			return env_val.strip().upper()
	return default




ZERO_SPEED: Final[float] = 1.0e-12
ORBIT_SENSE: Final[float] = 1.0

LOG_LEVEL: Final[str] = _parse_level()
LOG_FORMAT: Final[str] = os.getenv(
	"ACCRETION_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
