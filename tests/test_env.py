"""
GYMNASIUM WRAPPER TESTS

Headless only: render_mode stays None so arcade is never imported.
"""
import numpy as np
import pytest

from game.asteroids.env import AsteroidsEnv, R_ALIVE, R_DEATH, OBSTACLE_FEATURES
from conftest import make_rock, make_item


@pytest.fixture
def env():
    env = AsteroidsEnv(width=800, height=600, max_steps=50, k_obstacles=3)
    env.reset(seed=0)
    yield env
    env.close()


class TestSpaces:
    """Action and observation spaces."""

    def test_reset_observation(self, env):
        obs, info = env.reset(seed=1)
        assert obs.dtype == np.float32
        assert obs.shape == (7 + 3 * OBSTACLE_FEATURES,)
        assert env.observation_space.contains(obs)
        assert info["step"] == 0
        assert info["terminal"] is False

    def test_empty_obstacle_slots_are_zero(self, env):
        obs = env._get_obs()
        assert np.all(obs[7:] == 0.0)

    def test_observation_in_bounds_during_play(self, env):
        for _ in range(50):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            if terminated or truncated:
                break

    def test_unknown_render_mode(self):
        with pytest.raises(ValueError):
            AsteroidsEnv(render_mode="rgb_array")


class TestActions:
    """Mapping of MultiDiscrete actions onto engine input."""

    def test_thrust(self, env):
        env.step([1, 0, 0])
        assert env.engine.ship.speed == pytest.approx(0.1)

    def test_turns(self, env):
        env.step([0, 1, 0])
        assert env.engine.ship.angle == pytest.approx(-0.05)
        env.step([0, 2, 0])
        env.step([0, 2, 0])
        assert env.engine.ship.angle == pytest.approx(0.05)

    def test_fire(self, env):
        _, _, _, _, info = env.step([0, 0, 1])
        assert info["num_projectiles"] == 1
        assert info["cooldown"] == 9


class TestEpisode:
    """Rewards, termination and truncation."""

    def test_survival_reward(self, env):
        _, reward, terminated, truncated, _ = env.step([0, 0, 0])
        assert reward == R_ALIVE
        assert not terminated
        assert not truncated

    def test_crash_terminates(self, env):
        env.engine.obstacles.append(make_rock(430, 300, radius=30))
        _, reward, terminated, _, info = env.step([0, 0, 0])
        assert terminated
        assert reward == -R_DEATH
        assert info["terminal"] is True

    def test_truncation_at_max_steps(self, env):
        truncated = False
        steps = 0
        while not truncated:
            _, _, _, truncated, _ = env.step([0, 0, 0])
            steps += 1
        assert steps == 50

    def test_reset_gives_fresh_engine(self, env):
        env.engine.obstacles.append(make_rock(430, 300, radius=30))
        env.step([0, 0, 0])
        env.reset(seed=3)
        assert not env.engine.is_terminal()
        assert env.engine.obstacles == []

    def test_same_seed_same_episode(self):
        a = AsteroidsEnv(max_steps=400)
        b = AsteroidsEnv(max_steps=400)
        obs_a, _ = a.reset(seed=9)
        obs_b, _ = b.reset(seed=9)
        for _ in range(400):
            obs_a, *_ = a.step([1, 2, 1])
            obs_b, *_ = b.step([1, 2, 1])
        np.testing.assert_array_equal(obs_a, obs_b)
        assert a.engine.obstacles == b.engine.obstacles


class TestObstacleFeatures:
    """Nearest-obstacle encoding."""

    def test_nearest_obstacle_first(self, env):
        env.engine.obstacles += [make_rock(700, 300, radius=30), make_item(500, 300)]
        obs = env._get_obs()
        nearest = obs[7:7 + OBSTACLE_FEATURES]
        assert nearest[0] == pytest.approx(100 / 400)
        assert nearest[5] == 1.0
        second = obs[7 + OBSTACLE_FEATURES:7 + 2 * OBSTACLE_FEATURES]
        assert second[0] == pytest.approx(300 / 400)
        assert second[5] == -1.0

    def test_offset_measured_across_wrap(self, env):
        env.engine.ship.x = 10.0
        env.engine.obstacles.append(make_rock(740, 300, radius=30))
        obs = env._get_obs()
        assert obs[7] == pytest.approx(-70 / 400)
        assert obs[8] == pytest.approx(0.0)
