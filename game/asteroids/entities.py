"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Ship:
    """Player ship entity"""
    x: float
    y: float
    angle: float = 0.0  # radians, 0 points along +x
    speed: float = 0.0
    radius: float = 15.0
    cooldown: int = 0  # ticks until the next shot is accepted


@dataclass
class Projectile:
    """Projectile fired by the ship"""
    x: float
    y: float
    dx: float
    dy: float
    alive: bool = True


@dataclass
class Obstacle:
    """Drifting obstacle; item obstacles grant shotgun mode when destroyed"""
    x: float
    y: float
    dx: float
    dy: float
    radius: float
    health: int
    is_item: bool = False
    alive: bool = True


@dataclass
class PowerUp:
    """Timed shotgun mode"""
    active: bool = False
    remaining_ticks: int = 0


@dataclass
class Spawner:
    """Periodic obstacle generator"""
    interval_ticks: int = 100
    countdown: int = 100
