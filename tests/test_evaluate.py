"""Tests for the baseline evaluation script."""
import pytest

from rl.evaluate import evaluate_policy, POLICIES


class TestEvaluatePolicy:
    """Short headless evaluation runs."""

    @pytest.mark.parametrize("policy", sorted(POLICIES))
    def test_runs_episodes(self, policy, capsys):
        results = evaluate_policy(policy=policy, n_episodes=2, seed=0, env_config={"max_steps": 30})
        assert len(results["episode_lengths"]) == 2
        assert all(0 < n <= 30 for n in results["episode_lengths"])
        assert "Mean Episode Length" in capsys.readouterr().out

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            evaluate_policy(policy="psychic")
