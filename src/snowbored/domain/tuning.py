from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Tuning:
    # Canvas (logical px)
    width: float = 800.0
    height: float = 400.0

    # Player
    player_x: float = 100.0
    player_w: float = 32.0
    player_h: float = 32.0
    band_top: float = 50.0
    band_bottom: float = 70.0  # y max is height - band_bottom
    movement_speed: float = 5.0
    gravity: float = 0.2
    ascend_accel: float = -0.2

    # Obstacles
    obstacle_w: float = 32.0
    obstacle_h: float = 48.0
    spawn_interval: int = 100  # frames
    min_spawn_interval: int = 30
    spawn_interval_step: int = 5
    despawn_x: float = -50.0
    tree_share: float = 0.7
    tree_variants: int = 3
    snowman_variants: int = 2

    # Difficulty ramp (wall clock)
    speed_ramp_ms: float = 2500.0
    speed_step: float = 0.05

    # Trail
    trail_cap: int = 50
    trail_y_offset: float = 10.0

    # Lives / scoring
    lives: int = 3
    invulnerability_frames: int = 120
    score_step: int = 10
    score_every: int = 60  # frames

    # Avalanche
    avalanche_countdown: int = 300
    avalanche_distance: float = 300.0
    avalanche_min_distance: float = 40.0
    avalanche_hit_distance: float = 50.0
    avalanche_seed_particles: int = 50

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if self.band_top >= self.height - self.band_bottom:
            raise ValueError("vertical band is empty")
        if self.min_spawn_interval <= 0 or self.spawn_interval < self.min_spawn_interval:
            raise ValueError("spawn_interval must be >= min_spawn_interval > 0")
        if self.score_every <= 0 or self.score_step <= 0:
            raise ValueError("score_every and score_step must be > 0")
        if self.lives <= 0:
            raise ValueError("lives must be > 0")
        if not 0.0 <= self.tree_share <= 1.0:
            raise ValueError("tree_share must be within [0, 1]")
        if self.tree_variants < 0 or self.snowman_variants < 0:
            raise ValueError("variant counts must be >= 0")

    @property
    def y_min(self) -> float:
        return self.band_top

    @property
    def y_max(self) -> float:
        return self.height - self.band_bottom

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))
