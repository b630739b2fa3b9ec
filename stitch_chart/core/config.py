"""Runtime settings with defaults, overridable from the environment.

  STITCH_CHART_WIDTH            grid width in stitches (default 40)
  STITCH_CHART_COLOURS          palette size (default 8)
  STITCH_CHART_CELL_SIZE        chart cell size in pixels (default 20)
  STITCH_CHART_SAMPLE_STEP      quantizer samples every Nth pixel (default 5)
  STITCH_CHART_ALPHA_THRESHOLD  pixels with alpha <= this are not sampled (default 128)

Call core.env.load_env() first to pick these up from a .env file.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

from stitch_chart.core.errors import ConfigError

ENV_PREFIX = 'STITCH_CHART_'

# Lower bounds per field; alpha_threshold may legitimately be 0
_MINIMUMS = {'alpha_threshold': 0}


@dataclass(frozen=True)
class Settings:
    width: int = 40
    colours: int = 8
    cell_size: int = 20
    sample_step: int = 5
    alpha_threshold: int = 128

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        env = os.environ if environ is None else environ
        values: dict[str, int] = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = env.get(key)
            if raw is None or raw.strip() == '':
                continue
            try:
                value = int(raw)
            except ValueError:
                raise ConfigError(f'{key} must be an integer, got {raw!r}') from None
            minimum = _MINIMUMS.get(f.name, 1)
            if value < minimum:
                raise ConfigError(f'{key} must be >= {minimum}, got {value}')
            values[f.name] = value
        return cls(**values)
