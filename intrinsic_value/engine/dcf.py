"""
Pure DCF math engine.

This module contains pure functions for DCF calculations. No I/O, no record
access, just numeric computations on decimal rates. Degenerate inputs raise
typed errors instead of returning NaN or infinity.

Key functions:
  compute_dcf_value: Main entry point, computes DCF value per share
  compute_pv_explicit: PV of the explicit forecast period
  compute_perpetuity_value: Gordon-style perpetuity of current FCF
"""

from math import isfinite
from typing import Tuple

from intrinsic_value.domain.errors import (
    DivisionError,
    InsufficientDataError,
    UndefinedResultError,
)


def compute_pv_explicit(
    fcf0: float,
    growth_rate: float,
    discount_rate: float,
    n_years: int = 10,
) -> float:
  """
  Compute present value of the explicit forecast period.

  pv = sum(fcf0 * (1 + g) ** t / (1 + r) ** t for t in 1..n_years)

  Args:
    fcf0: Free cash flow of the most recent period
    growth_rate: Yearly FCF growth rate (g)
    discount_rate: Required return (r)
    n_years: Number of explicit years

  Returns:
    Total PV of explicit period cash flows (absolute, not per share)
  """
  if n_years < 1:
    raise InsufficientDataError(f'Forecast needs at least one year, '
                                f'got {n_years}')
  if 1.0 + discount_rate == 0:
    raise DivisionError('Discount factor is zero')

  pv = 0.0
  try:
    for t in range(1, n_years + 1):
      pv += fcf0 * (1.0 + growth_rate)**t / (1.0 + discount_rate)**t
  except OverflowError as e:
    raise UndefinedResultError('Explicit period PV overflows') from e
  except ZeroDivisionError as e:
    raise DivisionError('Discount factor underflows to zero') from e

  if not isfinite(pv):
    raise UndefinedResultError(f'Explicit period PV is not finite: {pv}')
  return pv


def compute_perpetuity_value(
    fcf0: float,
    discount_rate: float,
    terminal_growth: float,
) -> float:
  """
  Compute the perpetuity value of current free cash flow.

  value = fcf0 / (r - g_terminal)

  The value is not discounted back from the end of the explicit period.

  Raises:
    DivisionError: discount_rate equals terminal_growth
  """
  if discount_rate == terminal_growth:
    raise DivisionError(
        f'Discount rate equals terminal growth ({discount_rate:.4f})')

  value = fcf0 / (discount_rate - terminal_growth)
  if not isfinite(value):
    raise UndefinedResultError(f'Perpetuity value is not finite: {value}')
  return value


def compute_dcf_value(
    fcf0: float,
    shares: float,
    growth_rate: float,
    discount_rate: float,
    terminal_growth: float,
    n_years: int = 10,
) -> Tuple[float, float, float]:
  """
  Compute DCF value per share using a two-stage model.

  Stage 1: Explicit forecast of FCF growing at growth_rate
  Stage 2: Perpetuity of current FCF growing at terminal_growth

  Args:
    fcf0: Free cash flow of the most recent period
    shares: Diluted shares outstanding
    growth_rate: Explicit period FCF growth rate
    discount_rate: Required return (r)
    terminal_growth: Perpetual growth rate (inflation)
    n_years: Number of explicit years

  Returns:
    Tuple of (value_per_share, pv_explicit, perpetuity_value):
    - value_per_share: (pv_explicit + perpetuity_value) / shares
    - pv_explicit: PV of explicit period FCF
    - perpetuity_value: Perpetuity value of current FCF
  """
  if shares == 0:
    raise DivisionError('Diluted shares outstanding is zero')

  pv_explicit = compute_pv_explicit(fcf0, growth_rate, discount_rate, n_years)
  perpetuity_value = compute_perpetuity_value(fcf0, discount_rate,
                                              terminal_growth)

  value_per_share = (pv_explicit + perpetuity_value) / shares
  if not isfinite(value_per_share):
    raise UndefinedResultError(
        f'DCF value per share is not finite: {value_per_share}')
  return value_per_share, pv_explicit, perpetuity_value
