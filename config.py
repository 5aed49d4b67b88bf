"""Load/save app settings. Settings live in configs/settings.json; the grid snapshot sits next to it."""

import json
from pathlib import Path

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
SNAPSHOT_FILE = CONFIG_DIR / "snapshot.json"

TICK_RATE_MIN, TICK_RATE_MAX = 1, 60


def default_config() -> dict:
    return {
        "world": {"width": 200, "height": 200},
        "tick_rate": 10,
        "seed": -1,
        "cell_px": 3,
        "snapshot_path": str(SNAPSHOT_FILE),
        "log_level": "INFO",
    }


def _merge_defaults(data: dict) -> dict:
    d = default_config()
    if "world" in data:
        d["world"] = {**d["world"], **data["world"]}
    for k in ("tick_rate", "seed", "cell_px", "snapshot_path", "log_level"):
        if k in data:
            d[k] = data[k]
    return d


def load_config(path: Path | str | None = None) -> dict:
    """Settings from path (default configs/settings.json); missing file = defaults."""
    p = Path(path) if path is not None else SETTINGS_FILE
    if not p.exists():
        return default_config()
    with open(p, "r") as f:
        return _merge_defaults(json.load(f))


def save_config(cfg: dict, path: Path | str | None = None) -> None:
    p = Path(path) if path is not None else SETTINGS_FILE
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as f:
        json.dump(_merge_defaults(cfg), f, indent=2)


def clamp_tick_rate(rate: int) -> int:
    return max(TICK_RATE_MIN, min(TICK_RATE_MAX, int(rate)))
