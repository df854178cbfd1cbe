from __future__ import annotations

from dataclasses import dataclass

from snowbored.domain.tuning import Tuning


@dataclass(frozen=True)
class Player:
    x: float
    y: float
    vy: float
    ascending: bool


@dataclass(frozen=True)
class Obstacle:
    x: float
    y: float
    kind: str     # "tree" | "snowman"
    variant: int  # index into the sprite variants of `kind`


@dataclass(frozen=True)
class TrailPoint:
    x: float
    y: float


@dataclass(frozen=True)
class AvalancheParticle:
    x: float
    y: float
    size: float
    speed: float
    opacity: float


@dataclass(frozen=True)
class Avalanche:
    started: bool
    intensity: float
    distance: float  # px behind the player
    timer: int       # countdown frames before it starts
    particles: tuple[AvalancheParticle, ...]


@dataclass(frozen=True)
class GameState:
    player: Player
    obstacles: tuple[Obstacle, ...]
    trail: tuple[TrailPoint, ...]  # newest first
    avalanche: Avalanche

    frame_count: int
    elapsed_ms: float  # session clock, 0 at session start

    # Difficulty
    speed_multiplier: float
    spawn_interval: int
    last_speed_increase_ms: float

    # Outcome
    score: int
    lives: int
    invulnerable: bool
    invulnerability_timer: int
    game_over: bool
    game_time: int  # whole seconds, frozen on game over

    tuning: Tuning


@dataclass(frozen=True)
class GameResult:
    score: int
    game_time: int  # seconds
