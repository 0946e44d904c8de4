"""Load/save simulation parameters. Configs live in configs/ as {seed}_{name}.json.
Only parameters are stored; world state is never persisted."""

import json
import re
from pathlib import Path

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
LAST_FILE = CONFIG_DIR / "last.txt"


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def config_id(seed: int, name: str) -> str:
    return f"{seed}_{_sanitize_name(name)}"


def get_config_path(seed: int, name: str) -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR / f"{config_id(seed, name)}.json"


def get_last_config() -> tuple[int, str] | None:
    if not LAST_FILE.exists():
        return None
    try:
        raw = LAST_FILE.read_text().strip()
        if "_" not in raw:
            return None
        first, rest = raw.split("_", 1)
        return (int(first), rest)
    except (ValueError, OSError):
        return None


def set_last_config(seed: int, name: str) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LAST_FILE.write_text(config_id(seed, name))


def load_config(path: Path | str | None = None) -> dict:
    if path is not None:
        p = Path(path)
        if not p.exists():
            return _default_config()
        with open(p, "r") as f:
            return _merge_defaults(json.load(f))
    last = get_last_config()
    if last is None:
        return _default_config()
    p = get_config_path(last[0], last[1])
    if not p.exists():
        return _default_config()
    with open(p, "r") as f:
        return _merge_defaults(json.load(f))


def save_config(params: dict, actual_seed: int, name: str) -> Path:
    """Save parameters under {actual_seed}_{name}.json and mark them as last used."""
    path = get_config_path(actual_seed, name)
    out = {**params, "actual_seed_used": actual_seed}
    with open(path, "w") as f:
        json.dump(out, f, indent=2)
    set_last_config(actual_seed, name)
    return path


def _default_config() -> dict:
    return {
        "mode": "explore",
        "world": {"nx": 50, "ny": 50, "nz": 1},
        "view_depth": 3,
        "density": 0.33,
        "cell_px": None,
        "seed": -1,
        "lock_seed": False,
        "palette": None,
        "selection": {"friends": 4, "inventory": 4, "animals": 6},
        "center_item": "Heart",
        "animation": {
            "tick_ms": 50,
            "ramp_ms": 2000,
            "total_fade_steps": 12,
            "reroll_chance": 0.05,
            "spawn_chance": 0.0001,
        },
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    for k in ("world", "animation"):
        if isinstance(data.get(k), dict):
            d[k] = {**d[k], **data[k]}
    for k in (
        "mode", "view_depth", "density", "cell_px", "seed", "lock_seed", "actual_seed_used",
        "palette", "selection", "center_item",
    ):
        if k in data:
            d[k] = data[k]
    return d
