from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_EPHEMERIS_TABLE = "KALENDARILO_EPHEMERIS_TABLE"
TABLE_FILENAME = "TDBtimes.txt"


def _default_cache_dir(environ: Mapping[str, str]) -> Path:
    xdg = environ.get("XDG_CACHE_HOME", "").strip()
    if xdg:
        return Path(xdg).expanduser() / "kalendarilo"
    return Path.home() / ".cache" / "kalendarilo"


@dataclass(frozen=True)
class TableConfig:
    """
    Where the ephemeris table is looked for, and which sui it keeps.

    Search order used by ``kalendarilo.chinese.ephemeris.default_store``:
      1) ``ephemeris_path`` (from KALENDARILO_EPHEMERIS_TABLE)
      2) ``cache_dir / TDBtimes.txt`` ($XDG_CACHE_HOME/kalendarilo or ~/.cache/kalendarilo)
      3) packaged data (kalendarilo/chinese/data/TDBtimes.txt)
    """
    ephemeris_path: Optional[Path] = None
    cache_dir: Optional[Path] = None
    year_min: int = 1970
    year_max: int = 2050

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TableConfig":
        env = os.environ if environ is None else environ
        p = env.get(ENV_EPHEMERIS_TABLE, "").strip()
        return cls(
            ephemeris_path=Path(p).expanduser() if p else None,
            cache_dir=_default_cache_dir(env),
        )

    @property
    def cache_path(self) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / TABLE_FILENAME
