'''
Discounted cash flow estimator.

Grows the latest free cash flow at the equity growth rate over an explicit
horizon, adds a perpetuity of current free cash flow growing at inflation,
and divides by diluted shares outstanding. The equity growth rate stands in
for free cash flow growth.
'''

import logging

from intrinsic_value.domain.types import (
    FREE_CASH_FLOW,
    SHARES_DILUTED,
    EstimateOutput,
    StatementHistory,
)
from intrinsic_value.engine.dcf import compute_dcf_value
from intrinsic_value.estimators.fair_value import History

logger = logging.getLogger(__name__)

DEFAULT_DISCOUNT_RATE = 10.0
DEFAULT_INFLATION_RATE = 3.0


def compute_dcf(
    cash_flow: History,
    income_statement: History,
    growth_rate: float,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
    inflation_rate: float = DEFAULT_INFLATION_RATE,
    projection_years: int = 10,
) -> EstimateOutput[float]:
  '''
  Estimate DCF value per share with diagnostics.

  Args:
    cash_flow: Cash flow statement history, newest first
    income_statement: Income statement history, newest first
    growth_rate: FCF growth assumption in percent (the equity growth rate)
    discount_rate: Required return in percent
    inflation_rate: Perpetual growth rate in percent
    projection_years: Number of explicit years

  Returns:
    EstimateOutput whose value is the unrounded DCF value per share

  Raises:
    InsufficientDataError: Empty cash flow or income statement history
    DivisionError: Zero shares or discount rate equal to inflation rate
    MissingFieldError: A required line item is absent
  '''
  cash_flow = StatementHistory.coerce(cash_flow, 'cash flow')
  income_statement = StatementHistory.coerce(income_statement,
                                             'income statement')

  cash_flow.require(1)
  income_statement.require(1)

  fcf = cash_flow.value(FREE_CASH_FLOW)
  shares = income_statement.value(SHARES_DILUTED)

  value, pv_explicit, perpetuity = compute_dcf_value(
      fcf0=fcf,
      shares=shares,
      growth_rate=growth_rate / 100,
      discount_rate=discount_rate / 100,
      terminal_growth=inflation_rate / 100,
      n_years=projection_years,
  )

  logger.debug('DCF: pv_explicit=%.2f, perpetuity=%.2f, per_share=%.4f',
               pv_explicit, perpetuity, value)

  return EstimateOutput(value=value,
                        diag={
                            'dcf_method': 'two_stage',
                            'free_cash_flow': fcf,
                            'pv_explicit': pv_explicit,
                            'perpetuity_value': perpetuity,
                            'discount_rate': discount_rate,
                            'inflation_rate': inflation_rate,
                        })


def estimate_dcf(
    cash_flow: History,
    income_statement: History,
    growth_rate: float,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
    inflation_rate: float = DEFAULT_INFLATION_RATE,
) -> float:
  '''Return the DCF value per share for the given histories.'''
  return compute_dcf(cash_flow, income_statement, growth_rate, discount_rate,
                     inflation_rate).value
