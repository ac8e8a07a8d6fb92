"""
Estimators turning statement histories into valuation metrics.

Each estimator reads line items from newest-first statement histories, calls
the pure math in intrinsic_value.engine and returns the value together with
diagnostic information. The estimate_* functions return the bare values.

Example:
  fair_value, growth_rate = estimate_growth_and_fair_value(
      balance_sheet, income_statement, risk_free_rate=2.0)
  dcf_value = estimate_dcf(cash_flow, income_statement, growth_rate)
"""

from intrinsic_value.estimators.dcf import compute_dcf
from intrinsic_value.estimators.dcf import estimate_dcf
from intrinsic_value.estimators.fair_value import compute_growth_and_fair_value
from intrinsic_value.estimators.fair_value import estimate_growth_and_fair_value

__all__ = [
    'compute_dcf',
    'compute_growth_and_fair_value',
    'estimate_dcf',
    'estimate_growth_and_fair_value',
]
