from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click

from snowbored.app.replay import InputPattern, run_headless, seeded_session
from snowbored.domain.scoring import format_clock
from snowbored.infra.exceptions import ScoreLoadError, SettingsError
from snowbored.infra.score_book import ScoreBook
from snowbored.infra.settings import Settings, load_settings


_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except SettingsError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def main(log_level: str) -> None:
    """SnowBored: outrun the avalanche."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@_config_option
@click.option("--seed", type=int, default=None, help="Seed for a reproducible run.")
@click.option("--player", "player_name", default=None, help="Name recorded in the score book.")
def play(config_path: Path | None, seed: int | None, player_name: str | None) -> None:
    """Open the game window."""
    settings = _load(config_path)
    if seed is not None:
        settings = replace(settings, seed=seed)
    if player_name:
        settings = replace(settings, player_name=player_name)

    # Tk is only needed for the window; the other commands run headless.
    from snowbored.app.game_app import GameApp

    GameApp(settings).run()


@main.command()
@_config_option
@click.option("--seed", type=int, default=0, show_default=True)
@click.option("--frames", type=click.IntRange(min=1), default=36000, show_default=True)
@click.option("--hold", type=click.IntRange(min=0), default=0, show_default=True,
              help="Frames to hold ascend per cycle.")
@click.option("--release", type=click.IntRange(min=0), default=1, show_default=True,
              help="Frames to release ascend per cycle.")
def simulate(
    config_path: Path | None, seed: int, frames: int, hold: int, release: int
) -> None:
    """Play a seeded session without a window and print the outcome."""
    settings = _load(config_path)
    try:
        pattern = InputPattern(hold=hold, release=release)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--hold/--release") from e

    session = seeded_session(seed, settings.tuning)
    state = run_headless(session, max_frames=frames, pattern=pattern)

    click.echo(f"frames:    {state.frame_count}")
    click.echo(f"score:     {state.score}")
    click.echo(f"lives:     {state.lives}")
    click.echo(f"speed:     {state.speed_multiplier:.2f}")
    if state.game_over:
        click.echo(f"game over: {format_clock(state.game_time)} ({state.game_time}s)")
    else:
        click.echo("game over: no")


@main.command()
@_config_option
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
def scores(config_path: Path | None, limit: int) -> None:
    """Show the local score book."""
    settings = _load(config_path)
    book = ScoreBook(settings.scores_file, tuning=settings.tuning)
    try:
        entries = book.top(limit)
    except ScoreLoadError as e:
        raise click.ClickException(str(e)) from e

    if not entries:
        click.echo("No scores yet! Be the first!")
        return
    for rank, e in enumerate(entries, start=1):
        click.echo(f"{rank:>3}. {e.player:<20} {e.score:>7}  {format_clock(e.game_time)}")
