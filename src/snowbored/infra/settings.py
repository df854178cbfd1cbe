from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from snowbored.domain.tuning import Tuning
from snowbored.infra.exceptions import SettingsError


logger = logging.getLogger("snowbored.settings")

HEART_URL = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "icons8-pixel-heart-30-E8WvRfI37lnml1fzhv2B1ufLxpPDrI.png"
)
BACKGROUND_URL = "https://i.postimg.cc/tT0yD64J/fundo5.png"


def _default_assets() -> dict[str, Any]:
    return {
        "player": ["assets/player.png"],
        "heart": [HEART_URL, "assets/pixel-heart.png"],
        "background": [BACKGROUND_URL, "assets/background.png"],
        "trees": [["assets/tree1.png"], ["assets/tree2.png"], ["assets/tree3.png"]],
        "snowmen": [["assets/snowman1.png"], ["assets/snowman2.png"]],
    }


_SINGLE_ASSETS = ("player", "heart", "background")
_VARIANT_ASSETS = ("trees", "snowmen")


@dataclass(frozen=True)
class Settings:
    title: str = "SnowBored"
    fps: int = 60
    seed: int | None = None
    player_name: str = "player"
    scores_path: Path = Path("scores.json")
    asset_timeout: float = 5.0  # seconds per remote fetch
    base_dir: Path = field(default_factory=Path.cwd)  # relative asset/score paths resolve here
    tuning: Tuning = field(default_factory=Tuning)
    assets: dict[str, Any] = field(default_factory=_default_assets)

    def resolve(self, p: str | Path) -> Path:
        path = Path(p).expanduser()
        return path if path.is_absolute() else self.base_dir / path

    @property
    def scores_file(self) -> Path:
        return self.resolve(self.scores_path)


_TOP_LEVEL_KEYS = frozenset(
    {"title", "fps", "seed", "player_name", "scores_path", "asset_timeout", "tuning", "assets"}
)


def load_settings(path: Path | None = None) -> Settings:
    """
    No path means defaults. An explicit path must exist; unknown keys are
    rejected instead of silently ignored.
    """
    if path is None:
        return Settings()

    try:
        text = path.read_text(encoding="utf-8")
        raw = yaml.safe_load(text) or {}
    except FileNotFoundError as e:
        raise SettingsError(f"Settings file not found: {path}") from e
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Failed to read settings from {path}: {e}") from e

    if not isinstance(raw, dict):
        raise SettingsError("Settings root must be a mapping.")

    settings = settings_from_dict(raw, base_dir=path.resolve().parent)
    logger.info("Loaded settings from %s", path)
    return settings


def settings_from_dict(raw: dict[str, Any], *, base_dir: Path) -> Settings:
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise SettingsError(f"Unknown settings keys: {', '.join(sorted(unknown))}")

    settings = Settings(base_dir=base_dir)
    updates: dict[str, Any] = {}

    if "title" in raw:
        updates["title"] = str(raw["title"])
    if "player_name" in raw:
        updates["player_name"] = str(raw["player_name"])
    if "fps" in raw:
        fps = raw["fps"]
        if not isinstance(fps, int) or fps <= 0:
            raise SettingsError("fps must be a positive integer.")
        updates["fps"] = fps
    if "seed" in raw:
        seed = raw["seed"]
        if seed is not None and not isinstance(seed, int):
            raise SettingsError("seed must be an integer or null.")
        updates["seed"] = seed
    if "scores_path" in raw:
        updates["scores_path"] = Path(str(raw["scores_path"]))
    if "asset_timeout" in raw:
        timeout = raw["asset_timeout"]
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise SettingsError("asset_timeout must be a positive number.")
        updates["asset_timeout"] = float(timeout)
    if "tuning" in raw:
        updates["tuning"] = _decode_tuning(raw["tuning"])
    if "assets" in raw:
        updates["assets"] = _decode_assets(raw["assets"])

    return replace(settings, **updates)


def _decode_tuning(obj: Any) -> Tuning:
    if not isinstance(obj, dict):
        raise SettingsError("tuning must be a mapping.")
    unknown = set(obj) - Tuning.field_names()
    if unknown:
        raise SettingsError(f"Unknown tuning keys: {', '.join(sorted(unknown))}")
    try:
        return Tuning(**obj)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid tuning: {e}") from e


def _decode_assets(obj: Any) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise SettingsError("assets must be a mapping.")

    assets = _default_assets()
    for key, value in obj.items():
        if key in _SINGLE_ASSETS:
            assets[key] = _chain(value, key)
        elif key in _VARIANT_ASSETS:
            if not isinstance(value, list):
                raise SettingsError(f"assets.{key} must be a list of candidate chains.")
            assets[key] = [_chain(v, f"{key}[{i}]") for i, v in enumerate(value)]
        else:
            raise SettingsError(f"Unknown asset: {key}")
    return assets


def _chain(value: Any, label: str) -> list[str]:
    # A bare string is a one-candidate chain.
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) and v for v in value):
        return list(value)
    raise SettingsError(f"assets.{label} must be a string or a list of strings.")
