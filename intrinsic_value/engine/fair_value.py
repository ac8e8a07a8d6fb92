"""
Pure book-value fair value math.

Rates are decimals here (0.10 for 10%). Percent conversion and record access
happen in the estimators. Instead of returning NaN these functions raise the
typed errors from intrinsic_value.domain.errors.

Key functions:
  compute_equity_cagr: Compound annual growth of shareholders equity
  compute_book_value_per_share: Equity over diluted shares
  compute_fair_value: Projected book value plus a dividend annuity
  round_percent: Decimal rate to a percent rounded half-up to 2 places
"""

import math
from math import floor, isfinite

from intrinsic_value.domain.errors import (
    DivisionError,
    InsufficientDataError,
    UndefinedResultError,
)


def _require_finite(value: float, what: str) -> float:
  if not isfinite(value):
    raise UndefinedResultError(f'{what} is not finite: {value}')
  return value


def compute_equity_cagr(
    current_equity: float,
    previous_equity: float,
    n_periods: int,
) -> float:
  """
  Compute compound annual growth rate of equity.

  rate = (current / previous) ** (1 / n_periods) - 1

  Args:
    current_equity: Equity of the most recent period
    previous_equity: Equity n_periods earlier
    n_periods: Number of yearly steps between the two (>= 1)

  Returns:
    Growth rate as a decimal

  Raises:
    InsufficientDataError: n_periods < 1
    DivisionError: previous_equity is zero
    UndefinedResultError: Negative equity ratio with a fractional root
  """
  if n_periods < 1:
    raise InsufficientDataError(
        f'Growth needs at least one period step, got {n_periods}')
  if previous_equity == 0:
    raise DivisionError('Previous shareholders equity is zero')

  ratio = _require_finite(current_equity / previous_equity, 'Equity ratio')
  try:
    growth = math.pow(ratio, 1.0 / n_periods) - 1.0
  except ValueError as e:
    raise UndefinedResultError(
        f'Equity ratio {ratio:.4f} has no real {n_periods}-year root') from e
  return _require_finite(growth, 'Equity growth rate')


def compute_book_value_per_share(equity: float, shares: float) -> float:
  """Equity divided by diluted shares outstanding."""
  if shares == 0:
    raise DivisionError('Diluted shares outstanding is zero')
  return _require_finite(equity / shares, 'Book value per share')


def compute_fair_value(
    book_value_per_share: float,
    growth_rate: float,
    dividend_per_share: float,
    risk_free_rate: float,
    n_years: int = 10,
) -> float:
  """
  Compute fair value per share with the book value method.

  Book value is compounded at the equity growth rate for n_years and a
  dividend annuity of n_years payments is discounted once at the risk-free
  rate:

    fv = bv * (1 + g) ** n + (dps * n) / (1 + rf) ** n

  Args:
    book_value_per_share: Current book value per share
    growth_rate: Equity growth rate (decimal)
    dividend_per_share: Latest annual dividend per share
    risk_free_rate: Long-term risk-free rate (decimal)
    n_years: Projection horizon

  Returns:
    Fair value per share

  Raises:
    DivisionError: Risk-free discount factor is zero
    UndefinedResultError: Projection overflows
  """
  try:
    projected_bv = book_value_per_share * (1.0 + growth_rate)**n_years
    discount_factor = (1.0 + risk_free_rate)**n_years
  except OverflowError as e:
    raise UndefinedResultError('Fair value projection overflows') from e

  if discount_factor == 0:
    raise DivisionError('Risk-free discount factor is zero')

  dividends = (dividend_per_share * n_years) / discount_factor
  return _require_finite(projected_bv + dividends, 'Fair value')


def round_percent(rate: float) -> float:
  """
  Convert a decimal rate to percent rounded half-up to 2 decimals.

  0.123456 -> 12.35
  """
  return floor(rate * 10000 + 0.5) / 100
