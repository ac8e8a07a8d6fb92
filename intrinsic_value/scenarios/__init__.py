"""Scenario configuration."""

from intrinsic_value.scenarios.config import ScenarioConfig

__all__ = [
    'ScenarioConfig',
]
