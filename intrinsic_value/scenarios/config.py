"""
Scenario configuration for valuation runs.

ScenarioConfig is a serializable (JSON-friendly) configuration class holding
the rate inputs and horizons used by the estimators. All rates are percents.
"""

from dataclasses import asdict
from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any


@dataclass
class ScenarioConfig:
  """
  Configuration for a valuation scenario.

  Attributes:
    name: Human-readable scenario name
    risk_free_rate: Long-term risk-free rate used to discount dividends
    discount_rate: Required return used by the DCF estimator
    inflation_rate: Perpetual growth rate used by the DCF estimator
    lookback_years: Maximum number of yearly steps for equity growth
    projection_years: Horizon of the fair value and DCF projections
  """
  name: str = 'default'
  risk_free_rate: float = 2.0
  discount_rate: float = 10.0
  inflation_rate: float = 3.0
  lookback_years: int = 5
  projection_years: int = 10

  def __post_init__(self) -> None:
    if self.lookback_years < 1:
      raise ValueError(
          f'lookback_years must be >= 1, got {self.lookback_years}')
    if self.projection_years < 1:
      raise ValueError(
          f'projection_years must be >= 1, got {self.projection_years}')

  @classmethod
  def default(cls) -> 'ScenarioConfig':
    """
    Create default scenario configuration.

    Uses:
      - 2% risk-free rate (10-year bond)
      - 10% discount rate
      - 3% inflation as perpetual growth
      - 5-year equity growth lookback
      - 10-year projection
    """
    return cls(
        name='default',
        risk_free_rate=2.0,
        discount_rate=10.0,
        inflation_rate=3.0,
        lookback_years=5,
        projection_years=10,
    )

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary, rejecting unknown keys."""
    unknown = set(data) - set(cls.__dataclass_fields__)
    if unknown:
      raise ValueError(f'Unknown config keys: {", ".join(sorted(unknown))}')
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))

  @classmethod
  def from_file(cls, path: Path) -> 'ScenarioConfig':
    """Load from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
      return cls.from_json(f.read())
