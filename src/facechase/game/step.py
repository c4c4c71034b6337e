"""
Per-tick simulation step.

All functions here are pure apart from ``advance``, which applies one
tick to a SimulationState in place. Order within a tick is fixed:

1. move the player from the held directions
2. collect the point (variants with points)
3. report the catch, or else
4. apply the time-based score and speed ramp (time-scored variants) and
   pursue the player at the ramped speed
"""

from dataclasses import dataclass
from typing import AbstractSet, Optional

from facechase.config.settings import GameTuning
from facechase.game.models import Point, SimulationState, Vec2, Viewport
from facechase.game.points import PointSpawner
from facechase.game.variants import Scoring, Variant
from facechase.input.directions import Direction


@dataclass(frozen=True)
class StepOutcome:
    """What a single tick did."""

    caught: bool = False
    collected: Optional[Point] = None
    score_delta: int = 0


def player_step(viewport: Viewport, tuning: GameTuning) -> float:
    """Per-tick player movement, smaller on narrow viewports."""
    return tuning.step_narrow if viewport.width < tuning.narrow_breakpoint else tuning.step_wide


def clamp(value: float, low: float, high: float) -> float:
    # Upper bound can be below zero on tiny viewports; the lower bound wins
    return max(low, min(value, high))


def clamp_position(pos: Vec2, viewport: Viewport, size: int) -> Vec2:
    """Keep an entity of ``size`` inside the viewport on both axes."""
    return Vec2(
        clamp(pos.x, 0, viewport.width - size),
        clamp(pos.y, 0, viewport.height - size),
    )


def move_player(
    pos: Vec2,
    held: AbstractSet[Direction],
    viewport: Viewport,
    size: int,
    step: float,
) -> Vec2:
    """Move by ``step`` along every held direction, then clamp to the viewport."""
    x, y = pos.x, pos.y
    for direction in held:
        x += direction.dx * step
        y += direction.dy * step

    return clamp_position(Vec2(x, y), viewport, size)


def pursue(enemy: Vec2, target: Vec2, speed: float, catch_distance: float) -> tuple[Vec2, bool]:
    """Advance ``enemy`` toward ``target``.

    Returns:
        (new_position, caught). When caught the enemy stays where it is.
    """
    delta = target - enemy
    dist = delta.length()

    if dist < catch_distance:
        return enemy, True

    # Coincident positions with a zero catch distance: no direction to move in
    if dist == 0:
        return enemy, False

    return enemy + delta.scaled(speed / dist), False


def try_collect(player: Vec2, point: Optional[Point], collect_distance: float, mega_value: int) -> int:
    """Score earned by touching ``point`` from ``player`` (0 if out of reach)."""
    if point is None:
        return 0
    if player.distance_to(point.pos) >= collect_distance:
        return 0
    return mega_value if point.mega else 1


def advance(
    state: SimulationState,
    held: AbstractSet[Direction],
    viewport: Viewport,
    variant: Variant,
    tuning: GameTuning,
    spawner: Optional[PointSpawner] = None,
) -> StepOutcome:
    """Apply one running tick to ``state``."""
    start_player = state.player.pos

    # 1. Player
    state.player.pos = move_player(
        start_player, held, viewport, state.player.size, player_step(viewport, tuning)
    )

    # 2. Points
    collected = None
    score_delta = 0
    if variant.scoring is Scoring.POINTS:
        earned = try_collect(state.player.pos, state.point, tuning.collect_distance, tuning.mega_value)
        if earned:
            collected = state.point
            score_delta += earned
            state.enemy.speed += tuning.point_speed_increment
            if spawner is not None:
                state.point = spawner.spawn(viewport)

    # 3. Enemy. A catch at tick start stands even if the player just moved clear
    enemy = state.enemy
    caught = (
        enemy.pos.distance_to(start_player) < tuning.catch_distance
        or enemy.pos.distance_to(state.player.pos) < tuning.catch_distance
    )

    if not caught:
        # 4. Time scoring. The ramped speed already applies to this tick's move
        if variant.scoring is Scoring.TIME:
            enemy.speed += tuning.tick_speed_increment
            score_delta += 1

        moved, _ = pursue(enemy.pos, state.player.pos, enemy.speed, tuning.catch_distance)
        enemy.pos = clamp_position(moved, viewport, state.player.size)

    state.raw_score += score_delta
    state.ticks += 1
    return StepOutcome(caught=caught, collected=collected, score_delta=score_delta)
