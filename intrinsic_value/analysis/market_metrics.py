'''
Market multiples shown next to the valuation.

Computes diluted EPS, price/earnings ratio, dividend yield and the recent
net income history from the income statement and the current price. These
metrics are independent of the growth, fair value and DCF estimators.
'''

from dataclasses import dataclass, field
from typing import Any, Dict, List

from intrinsic_value.domain.errors import DivisionError
from intrinsic_value.domain.types import (
    DIVIDEND_PER_SHARE,
    EPS_DILUTED,
    NET_INCOME,
    StatementHistory,
)
from intrinsic_value.estimators.fair_value import History


@dataclass
class MarketMetrics:
  '''
  Attributes:
    eps: Diluted earnings per share of the latest period
    pe_ratio: Price / EPS
    dividend_yield: Dividend per share / price, in percent
    net_income: Latest net income values, newest first
  '''
  eps: float
  pe_ratio: float
  dividend_yield: float
  net_income: List[float] = field(default_factory=list)

  def to_dict(self) -> Dict[str, Any]:
    '''Flatten to a row, one column per net income period.'''
    row: Dict[str, Any] = {
        'eps': self.eps,
        'pe_ratio': self.pe_ratio,
        'dividend_yield': self.dividend_yield,
    }
    for i, value in enumerate(self.net_income):
      row[f'net_income_{i}'] = value
    return row


def price_to_earnings(price: float, eps: float) -> float:
  if eps == 0:
    raise DivisionError('EPS is zero')
  return price / eps


def dividend_yield(dividend_per_share: float, price: float) -> float:
  '''Dividend yield in percent.'''
  if price == 0:
    raise DivisionError('Price is zero')
  return dividend_per_share / price * 100


def net_income_history(income_statement: History,
                       periods: int = 3) -> List[float]:
  '''Latest min(periods, len) net income values, newest first.'''
  income_statement = StatementHistory.coerce(income_statement,
                                             'income statement')
  income_statement.require(1)
  window = income_statement.window(periods)
  return [window.value(NET_INCOME, i) for i in range(len(window))]


def compute_market_metrics(income_statement: History,
                           price: float,
                           net_income_periods: int = 3) -> MarketMetrics:
  '''
  Compute market multiples for one ticker.

  Raises:
    InsufficientDataError: Empty income statement history
    DivisionError: Zero EPS or zero price
    MissingFieldError: A required line item is absent
  '''
  income_statement = StatementHistory.coerce(income_statement,
                                             'income statement')
  income_statement.require(1)

  eps = income_statement.value(EPS_DILUTED)
  dividend = income_statement.value(DIVIDEND_PER_SHARE)

  return MarketMetrics(
      eps=eps,
      pe_ratio=price_to_earnings(price, eps),
      dividend_yield=dividend_yield(dividend, price),
      net_income=net_income_history(income_statement, net_income_periods),
  )
