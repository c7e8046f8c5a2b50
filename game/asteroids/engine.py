"""
AsteroidsEngine - fixed-step simulation core
--------------------------------------------
- One ship on a wrapped plane that thrusts, turns and shoots
- Projectiles fly straight and vanish at the playfield edge
- Obstacles drift and wrap; item obstacles unlock a timed 5-way "shotgun"
- Contact between the ship and any obstacle ends the session

Each call to step() is exactly one tick. The engine never looks at a clock;
whoever drives it (arcade window, gymnasium loop, tests) owns the cadence.
Renderers read state through snapshot(), which hands out copies.

Order of one tick:
    fire event -> ship motion -> cooldown -> projectile motion + culling
    -> obstacle motion -> projectile/obstacle hits -> ship/obstacle contact
    -> spawner -> power-up timer
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Dict, Any

import numpy as np

from .entities import Ship, Projectile, Obstacle, PowerUp, Spawner
from .utils import wrap, distance, circles_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepInput:
    """Control state for a single tick"""
    thrust: bool = False
    turn_left: bool = False
    turn_right: bool = False
    # True only on the tick after the fire key went down; holding it does nothing
    fire: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine handed to renderers"""
    ship: Ship
    projectiles: Tuple[Projectile, ...]
    obstacles: Tuple[Obstacle, ...]
    power_up_active: bool
    power_up_ticks: int
    terminal: bool
    tick: int


class AsteroidsEngine:
    """Owns all game state and advances it one tick per step() call"""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        spawn_interval: int = 100,
        power_up_duration: int = 300,
        turn_rate: float = 0.05,  # rad/tick
        thrust_rate: float = 0.1,
        decel_rate: float = 0.05,
        max_speed: float = 5.0,
        projectile_speed: float = 10.0,
        fire_cooldown: int = 10,  # ticks
        ship_radius: float = 15.0,
        muzzle_offset: float = 20.0,
        spread_count: int = 5,
        spread_step: float = 0.2,  # rad between shotgun pellets
        item_probability: float = 0.1,
        obstacle_speed: float = 2.0,  # max |dx|, |dy| at spawn
        obstacle_radius_range: Tuple[float, float] = (30.0, 50.0),
        obstacle_health: int = 5,
        item_radius: float = 20.0,
        item_health: int = 1,
        rng=None,
        seed: Optional[int] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Playfield must have a positive size, got {width}x{height}")
        if spawn_interval < 1:
            raise ValueError(f"spawn_interval must be at least 1 tick, got {spawn_interval}")
        if power_up_duration < 0 or fire_cooldown < 0:
            raise ValueError("power_up_duration and fire_cooldown must be non-negative")
        if min(turn_rate, thrust_rate, decel_rate, max_speed, projectile_speed, obstacle_speed) < 0:
            raise ValueError("Rates and speeds must be non-negative")
        if not 0.0 <= item_probability <= 1.0:
            raise ValueError(f"item_probability must lie in [0, 1], got {item_probability}")
        if spread_count < 1:
            raise ValueError(f"spread_count must be at least 1, got {spread_count}")
        lo, hi = obstacle_radius_range
        if not 0 < lo <= hi:
            raise ValueError(f"Invalid obstacle_radius_range {obstacle_radius_range}")
        if obstacle_health < 1 or item_health < 1:
            raise ValueError("Obstacle health must be at least 1")
        if ship_radius < 0 or item_radius <= 0 or muzzle_offset < 0:
            raise ValueError("ship_radius and muzzle_offset must be non-negative, item_radius positive")

        # Arena
        self.width = width
        self.height = height

        # Ship handling
        self.turn_rate = turn_rate
        self.thrust_rate = thrust_rate
        self.decel_rate = decel_rate
        self.max_speed = max_speed
        self.ship_radius = ship_radius

        # Weapons
        self.projectile_speed = projectile_speed
        self.fire_cooldown = fire_cooldown
        self.muzzle_offset = muzzle_offset
        self.spread_count = spread_count
        self.spread_step = spread_step
        self.power_up_duration = power_up_duration

        # Obstacles
        self.spawn_interval = spawn_interval
        self.item_probability = item_probability
        self.obstacle_speed = obstacle_speed
        self.obstacle_radius_range = (lo, hi)
        self.obstacle_health = obstacle_health
        self.item_radius = item_radius
        self.item_health = item_health

        self.rng = rng if rng is not None else np.random.default_rng(seed)

        # World state
        self.ship: Ship = None  # type: ignore
        self.projectiles: List[Projectile] = []
        self.obstacles: List[Obstacle] = []
        self.power_up = PowerUp()
        self.spawner = Spawner(spawn_interval, spawn_interval)
        self._terminal = False
        self._tick = 0

        self.reset()

    # ----------------------------
    # Public API
    # ----------------------------

    def reset(self):
        """Start a new session with the ship at rest in the middle"""
        self.ship = Ship(x=self.width * 0.5, y=self.height * 0.5, radius=self.ship_radius)
        self.projectiles = []
        self.obstacles = []
        self.power_up = PowerUp()
        self.spawner = Spawner(self.spawn_interval, self.spawn_interval)
        self._terminal = False
        self._tick = 0

    def step(self, action: StepInput) -> None:
        if self._terminal:
            return

        if action.fire:
            self.fire()

        self._update_ship(action)

        if self.ship.cooldown > 0:
            self.ship.cooldown -= 1

        self._update_projectiles()
        self._update_obstacles()

        self._handle_projectile_hits()
        self._handle_ship_contact()

        self._spawn_logic()
        self._update_power_up()

        self._tick += 1

    def is_terminal(self) -> bool:
        return self._terminal

    def snapshot(self) -> Snapshot:
        return Snapshot(
            ship=replace(self.ship),
            projectiles=tuple(replace(p) for p in self.projectiles),
            obstacles=tuple(replace(o) for o in self.obstacles),
            power_up_active=self.power_up.active,
            power_up_ticks=self.power_up.remaining_ticks,
            terminal=self._terminal,
            tick=self._tick,
        )

    def fire(self) -> bool:
        """
        Handle one fire event. Returns True if the shot left the barrel.

        The cooldown is checked here but only counts down inside step(),
        so repeated events between two ticks cannot sneak extra shots in.
        """
        if self._terminal or self.ship.cooldown > 0:
            return False

        ship = self.ship
        ox = ship.x + math.cos(ship.angle) * self.muzzle_offset
        oy = ship.y + math.sin(ship.angle) * self.muzzle_offset

        if self.power_up.active:
            # Centered on the heading for odd and even counts alike
            mid = (self.spread_count - 1) / 2
            offsets = [(k - mid) * self.spread_step for k in range(self.spread_count)]
        else:
            offsets = [0.0]

        for offset in offsets:
            a = ship.angle + offset
            self.projectiles.append(Projectile(
                x=ox,
                y=oy,
                dx=self.projectile_speed * math.cos(a),
                dy=self.projectile_speed * math.sin(a),
            ))

        ship.cooldown = self.fire_cooldown
        logger.debug("Fired %d projectile(s) at tick %d", len(offsets), self._tick)
        return True

    def get_info(self) -> Dict[str, Any]:
        return {
            "tick": self._tick,
            "speed": self.ship.speed,
            "cooldown": self.ship.cooldown,
            "power_up_active": self.power_up.active,
            "power_up_ticks": self.power_up.remaining_ticks,
            "num_obstacles": len(self.obstacles),
            "num_projectiles": len(self.projectiles),
            "terminal": self._terminal,
        }

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _update_ship(self, action: StepInput):
        ship = self.ship

        if action.thrust:
            ship.speed = min(ship.speed + self.thrust_rate, self.max_speed)
        else:
            ship.speed = max(ship.speed - self.decel_rate, 0.0)

        if action.turn_left:
            ship.angle -= self.turn_rate
        if action.turn_right:
            ship.angle += self.turn_rate

        ship.x = wrap(ship.x + ship.speed * math.cos(ship.angle), self.width)
        ship.y = wrap(ship.y + ship.speed * math.sin(ship.angle), self.height)

    def _update_projectiles(self):
        for p in self.projectiles:
            p.x += p.dx
            p.y += p.dy

            # Projectiles do not wrap
            if p.x < 0 or p.x > self.width or p.y < 0 or p.y > self.height:
                p.alive = False

        self.projectiles = [p for p in self.projectiles if p.alive]

    def _update_obstacles(self):
        for o in self.obstacles:
            o.x = wrap(o.x + o.dx, self.width)
            o.y = wrap(o.y + o.dy, self.height)

    def _handle_projectile_hits(self):
        # Projectiles in firing order, each against obstacles in spawn order.
        # A projectile is spent on the first live obstacle it is inside of.
        for p in self.projectiles:
            for o in self.obstacles:
                if not o.alive:
                    continue
                if distance(p.x, p.y, o.x, o.y) < o.radius:
                    p.alive = False
                    o.health = max(o.health - 1, 0)
                    if o.health == 0:
                        o.alive = False
                        if o.is_item:
                            self._activate_power_up()
                    break

        self.projectiles = [p for p in self.projectiles if p.alive]
        self.obstacles = [o for o in self.obstacles if o.alive]

    def _handle_ship_contact(self):
        ship = self.ship
        for o in self.obstacles:
            if circles_overlap(ship.x, ship.y, ship.radius, o.x, o.y, o.radius):
                self._terminal = True
                logger.info("Ship hit an obstacle at tick %d, session over", self._tick)
                return

    def _spawn_logic(self):
        self.spawner.countdown -= 1
        if self.spawner.countdown <= 0:
            self._spawn_obstacle()
            self.spawner.countdown = self.spawner.interval_ticks

    def _spawn_obstacle(self):
        is_item = self.rng.random() < self.item_probability
        x = float(self.rng.uniform(0.0, self.width))
        y = float(self.rng.uniform(0.0, self.height))
        dx = float(self.rng.uniform(-self.obstacle_speed, self.obstacle_speed))
        dy = float(self.rng.uniform(-self.obstacle_speed, self.obstacle_speed))

        if is_item:
            radius = self.item_radius
            health = self.item_health
        else:
            radius = float(self.rng.uniform(*self.obstacle_radius_range))
            health = self.obstacle_health

        self.obstacles.append(Obstacle(
            x=x, y=y, dx=dx, dy=dy, radius=radius, health=health, is_item=bool(is_item)
        ))
        logger.debug("Spawned %s at (%.1f, %.1f) r=%.1f",
                     "item" if is_item else "obstacle", x, y, radius)

    def _activate_power_up(self):
        self.power_up.active = self.power_up_duration > 0
        self.power_up.remaining_ticks = self.power_up_duration
        logger.info("Shotgun mode for %d ticks", self.power_up_duration)

    def _update_power_up(self):
        if not self.power_up.active:
            return
        self.power_up.remaining_ticks -= 1
        if self.power_up.remaining_ticks <= 0:
            self.power_up.remaining_ticks = 0
            self.power_up.active = False
