"""Solve configuration.

Values come from, in increasing priority: defaults, a .env file or the
process environment (see constants.ENV_*), and CLI flags.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_MAX_RESTARTS,
    DEFAULT_MAX_STEPS,
    ENV_DATA_DIR,
    ENV_MAX_RESTARTS,
    ENV_MAX_STEPS,
    ENV_SEED,
)


class SolveConfig(BaseModel):
    """Settings for one solve run."""

    model_config = ConfigDict(frozen=True)

    seed: int | None = None
    max_restarts: int = Field(default=DEFAULT_MAX_RESTARTS, ge=1)
    max_steps: int | None = Field(default=DEFAULT_MAX_STEPS, gt=0)
    data_dir: Path = DEFAULT_DATA_DIR
    debug: bool = False

    @classmethod
    def from_env(cls, **overrides: object) -> SolveConfig:
        """
        Build a config from the environment, then apply overrides.

        Overrides that are None are ignored so argparse defaults can be
        passed straight through.
        """
        load_dotenv()

        values: dict[str, object] = {}
        env_map = {
            "seed": ENV_SEED,
            "max_restarts": ENV_MAX_RESTARTS,
            "max_steps": ENV_MAX_STEPS,
            "data_dir": ENV_DATA_DIR,
        }
        for field_name, env_name in env_map.items():
            raw = os.environ.get(env_name, "").strip()
            if raw:
                values[field_name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
