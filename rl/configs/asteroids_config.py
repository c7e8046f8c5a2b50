"""
Configuration for the asteroids engine, environment and evaluation runs
"""

# Engine parameters (one tick = one frame)
ENGINE_CONFIG = {
    "spawn_interval": 100,      # ticks between obstacle spawns
    "power_up_duration": 300,   # ticks of shotgun mode per item
    "turn_rate": 0.05,          # rad/tick
    "thrust_rate": 0.1,
    "decel_rate": 0.05,
    "max_speed": 5.0,
    "projectile_speed": 10.0,
    "fire_cooldown": 10,        # ticks
    "item_probability": 0.1,
}

# Environment parameters
ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_obstacles": 5,
    "engine_config": ENGINE_CONFIG,
}

# Evaluation settings
EVAL_CONFIG = {
    "seeds": [42, 123, 456],
    "n_eval_episodes": 10,
    "policies": ["random", "turret"],
}
