from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from .classes.enums import INITIALIZE_AT_STARTUP

ENV_THEATER = "PYTHEATER_THEATER"
ENV_PATH = "PYTHEATER_PATH"
ENV_SEED = "PYTHEATER_SEED"
ENV_VERBOSE = "PYTHEATER_VERBOSE"


@dataclass
class TheaterSettings:
    """
    Configuration shared by every region of a theater.

    `theater` is the active map; templates built for another map are dropped.
    `theater_path` holds one sub-directory per region (each with a
    `region.def`) and optionally an `inventories/` directory.
    """
    theater: str
    theater_path: str = ""
    seed: Optional[int] = None
    verbose: bool = False
    initialize_types: FrozenSet[str] = field(default_factory=lambda: INITIALIZE_AT_STARTUP)
    airspace_radius: float = 55560
    airspace_priority: int = 1000

    @property
    def inventories_path(self) -> str:
        return os.path.join(self.theater_path, "inventories")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TheaterSettings":
        """
        Build settings from PYTHEATER_* environment variables.

        Raises:
            ValueError: If PYTHEATER_THEATER is unset or PYTHEATER_SEED is not an integer
        """
        env = os.environ if environ is None else environ
        theater = env.get(ENV_THEATER, "")
        if not theater:
            raise ValueError(f"{ENV_THEATER} must name the active theater")

        seed_text = env.get(ENV_SEED, "").strip()
        try:
            seed = int(seed_text) if seed_text else None
        except ValueError as e:
            raise ValueError(f"{ENV_SEED} must be an integer, got {seed_text!r}") from e

        verbose = env.get(ENV_VERBOSE, "").strip().lower() in ("1", "true", "yes", "on")
        return cls(
            theater=theater,
            theater_path=env.get(ENV_PATH, ""),
            seed=seed,
            verbose=verbose,
        )
