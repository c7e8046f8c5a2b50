"""
AsteroidsEnv - gymnasium wrapper around AsteroidsEngine
-------------------------------------------------------
- Gymnasium API, one engine tick per env step
- MultiDiscrete action space: [thrust(2), turn(3), fire(2)]
- Vector observation: ship state + top-K nearest obstacles (toroidal distance)
- Survival signal for agents: small bonus per tick alive, penalty on the
  tick the ship is hit. This is a training signal, the game itself keeps no score.

Quick test:
    python -m game.asteroids.env
"""

from __future__ import annotations

import math
from typing import List, Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import AsteroidsEngine, StepInput, Snapshot
from .utils import clamp, toroidal_delta

R_ALIVE = 0.01
R_DEATH = 5.0

# turn action index -> (turn_left, turn_right)
TURNS = [(False, False), (True, False), (False, True)]

OBSTACLE_FEATURES = 6


class AsteroidsEnv(gym.Env):
    """Asteroids survival environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_obstacles: int = 5,
        engine_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles
        self.engine_config = dict(engine_config or {})

        # thrust: 0/1
        # turn: 0 none, 1 left, 2 right
        # fire: 0/1, each 1 is one key press
        self.action_space = spaces.MultiDiscrete([2, 3, 2])

        # Ship: pos(2) heading(2) speed(1) cooldown(1) power-up(1)
        # Each obstacle: rel pos(2) rel vel(2) radius(1) item(1)
        obs_dim = 2 + 2 + 1 + 1 + 1 + self.k_obstacles * OBSTACLE_FEATURES
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.engine: AsteroidsEngine = None  # type: ignore
        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.engine = AsteroidsEngine(
            width=self.width,
            height=self.height,
            rng=self.np_random,
            **self.engine_config,
        )
        if self._window is not None:
            self._window.engine = self.engine

        return self._get_obs(), self._get_info()

    def step(self, action):
        thrust, turn, fire = int(action[0]), int(action[1]), int(action[2])
        turn_left, turn_right = TURNS[turn % 3]

        self.engine.step(StepInput(
            thrust=bool(thrust),
            turn_left=turn_left,
            turn_right=turn_right,
            fire=bool(fire),
        ))

        terminated = self.engine.is_terminal()
        reward = -R_DEATH if terminated else R_ALIVE

        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state: Snapshot = self.engine.snapshot()
        ship = state.ship
        e = self.engine

        obs_parts: List[float] = [
            ship.x / self.width * 2 - 1,
            ship.y / self.height * 2 - 1,
            math.cos(ship.angle),
            math.sin(ship.angle),
            ship.speed / max(1e-6, e.max_speed) * 2 - 1,
            clamp(ship.cooldown / max(1, e.fire_cooldown) * 2 - 1, -1, 1),
            clamp(state.power_up_ticks / max(1, e.power_up_duration) * 2 - 1, -1, 1),
        ]

        ship_vx = ship.speed * math.cos(ship.angle)
        ship_vy = ship.speed * math.sin(ship.angle)
        vel_scale = max(1e-6, e.max_speed + e.obstacle_speed)
        max_radius = max(e.obstacle_radius_range[1], e.item_radius)

        # Obstacles: top-K nearest across the wrap
        def offset(o):
            return (toroidal_delta(ship.x, o.x, self.width),
                    toroidal_delta(ship.y, o.y, self.height))

        nearest = sorted(state.obstacles, key=lambda o: math.hypot(*offset(o)))
        for i in range(self.k_obstacles):
            if i < len(nearest):
                o = nearest[i]
                dx, dy = offset(o)
                obs_parts += [
                    clamp(dx / (self.width / 2), -1, 1),
                    clamp(dy / (self.height / 2), -1, 1),
                    clamp((o.dx - ship_vx) / vel_scale, -1, 1),
                    clamp((o.dy - ship_vy) / vel_scale, -1, 1),
                    clamp(o.radius / max_radius, 0, 1),
                    1.0 if o.is_item else -1.0,
                ]
            else:
                obs_parts += [0.0] * OBSTACLE_FEATURES

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = self.engine.get_info()
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # arcade needs a display, so only pull it in when asked to draw
            from .window import AsteroidsWindow
            self._window = AsteroidsWindow(self.engine, self.width, self.height)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42) -> float:
    """Run one episode with random actions and return its total reward"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} over {info['step']} steps")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
