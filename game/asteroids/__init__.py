"""Asteroids - wrapped-plane shooter simulation with a gymnasium wrapper"""

from .engine import AsteroidsEngine, StepInput, Snapshot
from .env import AsteroidsEnv, run_random_episode

__all__ = ['AsteroidsEngine', 'StepInput', 'Snapshot', 'AsteroidsEnv', 'run_random_episode']
