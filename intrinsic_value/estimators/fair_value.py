'''
Equity growth and fair value estimator.

Estimates the compound annual growth of shareholders equity over a lookback
window of balance sheets, then projects book value per share with that rate
and adds a dividend annuity discounted at the risk-free rate (Buffett-style
book value method).
'''

from collections.abc import Iterable
import logging
from typing import Tuple, Union

from intrinsic_value.domain.types import (
    DIVIDEND_PER_SHARE,
    EQUITY,
    SHARES_DILUTED,
    EstimateOutput,
    FinancialRecord,
    StatementHistory,
)
from intrinsic_value.engine.fair_value import (
    compute_book_value_per_share,
    compute_equity_cagr,
    compute_fair_value,
    round_percent,
)

logger = logging.getLogger(__name__)

History = Union[StatementHistory, Iterable[FinancialRecord]]


def compute_growth_and_fair_value(
    balance_sheet: History,
    income_statement: History,
    risk_free_rate: float = 2.0,
    lookback_years: int = 5,
    projection_years: int = 10,
) -> EstimateOutput[Tuple[float, float]]:
  '''
  Estimate equity growth rate and fair value per share with diagnostics.

  The window is the most recent record plus up to lookback_years older ones.
  Growth is measured from the oldest record in the window to the newest.

  Args:
    balance_sheet: Balance sheet history, newest first
    income_statement: Income statement history, newest first
    risk_free_rate: Long-term risk-free rate in percent (2.0 for 2%)
    lookback_years: Maximum number of yearly steps for growth
    projection_years: Fair value projection horizon

  Returns:
    EstimateOutput whose value is (fair_value, growth_rate_percent), the
    growth rate rounded to 2 decimals

  Raises:
    InsufficientDataError: Fewer than 2 balance sheets or no income statement
    DivisionError: Zero previous equity, zero shares or zero discount factor
    MissingFieldError: A required line item is absent
  '''
  balance_sheet = StatementHistory.coerce(balance_sheet, 'balance sheet')
  income_statement = StatementHistory.coerce(income_statement,
                                             'income statement')

  balance_sheet.require(2)
  income_statement.require(1)

  window = balance_sheet.window(lookback_years + 1)
  n_periods = len(window) - 1

  current_equity = window.value(EQUITY, 0)
  previous_equity = window.value(EQUITY, n_periods)
  rate = compute_equity_cagr(current_equity, previous_equity, n_periods)

  shares = income_statement.value(SHARES_DILUTED)
  dividend = income_statement.value(DIVIDEND_PER_SHARE)
  book_value = compute_book_value_per_share(current_equity, shares)

  fair_value = compute_fair_value(
      book_value_per_share=book_value,
      growth_rate=rate,
      dividend_per_share=dividend,
      risk_free_rate=risk_free_rate / 100,
      n_years=projection_years,
  )
  growth_rate = round_percent(rate)

  logger.debug('Equity growth over %d period(s): %.4f -> %.2f%%', n_periods,
               rate, growth_rate)

  return EstimateOutput(value=(fair_value, growth_rate),
                        diag={
                            'growth_method': 'equity_cagr',
                            'window_periods': len(window),
                            'current_equity': current_equity,
                            'previous_equity': previous_equity,
                            'raw_growth_rate': rate,
                            'book_value_per_share': book_value,
                            'dividend_per_share': dividend,
                            'shares_diluted': shares,
                            'risk_free_rate': risk_free_rate,
                        })


def estimate_growth_and_fair_value(
    balance_sheet: History,
    income_statement: History,
    risk_free_rate: float = 2.0,
) -> Tuple[float, float]:
  '''Return (fair_value, growth_rate_percent) for the given histories.'''
  return compute_growth_and_fair_value(balance_sheet, income_statement,
                                       risk_free_rate).value
