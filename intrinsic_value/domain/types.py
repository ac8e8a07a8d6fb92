'''
Domain types for the intrinsic value engine.

These dataclasses provide typed interfaces between the document loader, the
estimators and the reporting layer, so that estimators never index raw JSON
payloads directly.
'''

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
import math
from types import MappingProxyType
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar, Union

from intrinsic_value.domain.errors import (
    InsufficientDataError,
    InvalidFieldError,
    MissingFieldError,
)

T = TypeVar('T')

FinancialRecord = Mapping[str, Any]

EQUITY = 'Total shareholders equity'
SHARES_DILUTED = 'Weighted Average Shs Out (Dil)'
DIVIDEND_PER_SHARE = 'Dividend per Share'
FREE_CASH_FLOW = 'Free Cash Flow'
NET_INCOME = 'Net Income'
EPS_DILUTED = 'EPS Diluted'


def field_value(record: FinancialRecord,
                field_name: str,
                statement: str = 'statement',
                period: Optional[int] = None) -> float:
  '''
  Read a numeric line item from a financial record.

  Numeric strings are parsed, since the data source ships most values as
  strings.

  Args:
    record: One fiscal period of a statement
    field_name: Line-item name, matched verbatim
    statement: Statement name used in error messages
    period: Record index used in error messages

  Returns:
    The line item as a finite float

  Raises:
    MissingFieldError: Field absent, None, blank or NaN
    InvalidFieldError: Field present but not a finite number
  '''
  raw = record.get(field_name)
  if raw is None:
    raise MissingFieldError(field_name, statement, period)

  if isinstance(raw, bool):
    raise InvalidFieldError(
        f'"{field_name}" in {statement} is not numeric: {raw!r}')

  if isinstance(raw, str):
    if not raw.strip():
      raise MissingFieldError(field_name, statement, period)
    try:
      value = float(raw.strip().replace(',', ''))
    except ValueError as e:
      raise InvalidFieldError(
          f'"{field_name}" in {statement} is not numeric: {raw!r}') from e
  else:
    try:
      value = float(raw)
    except (TypeError, ValueError) as e:
      raise InvalidFieldError(
          f'"{field_name}" in {statement} is not numeric: {raw!r}') from e

  if math.isnan(value):
    raise MissingFieldError(field_name, statement, period)
  if math.isinf(value):
    raise InvalidFieldError(f'"{field_name}" in {statement} is infinite')
  return value


@dataclass(frozen=True)
class StatementHistory(Sequence):
  '''
  Newest-first history of one financial statement.

  Index 0 is always the most recent fiscal period. Records are copied into
  read-only mappings on construction.

  Attributes:
    records: Financial records, newest first
    statement: Statement name (e.g. 'balance sheet'), used in errors
  '''
  records: Tuple[FinancialRecord, ...] = ()
  statement: str = 'statement'

  # Records are mappings, so histories compare by value but do not hash.
  __hash__ = None

  def __post_init__(self) -> None:
    frozen = tuple(MappingProxyType(dict(r)) for r in self.records)
    object.__setattr__(self, 'records', frozen)

  @classmethod
  def coerce(cls,
             records: Union['StatementHistory', Iterable[FinancialRecord]],
             statement: str = 'statement') -> 'StatementHistory':
    '''Wrap a plain sequence of records; histories pass through unchanged.'''
    if isinstance(records, StatementHistory):
      return records
    return cls(records=tuple(records), statement=statement)

  def __len__(self) -> int:
    return len(self.records)

  def __getitem__(self, index):
    if isinstance(index, slice):
      return StatementHistory(self.records[index], self.statement)
    return self.records[index]

  def require(self, min_periods: int) -> None:
    '''Raise InsufficientDataError unless at least min_periods exist.'''
    if len(self.records) < min_periods:
      raise InsufficientDataError(
          f'{self.statement} has {len(self.records)} period(s), '
          f'need at least {min_periods}')

  def window(self, size: int) -> 'StatementHistory':
    '''Most recent min(size, len) records.'''
    return self[:max(0, size)]

  def value(self, field_name: str, period: int = 0) -> float:
    '''Numeric line item of the given period (0 = most recent).'''
    self.require(period + 1)
    return field_value(self.records[period], field_name, self.statement,
                       period)


@dataclass(frozen=True)
class MarketProfile:
  '''
  Market profile of a company.

  growth_rate, fair_value and dcf_value are outputs of a valuation run and
  are None until one has been attached with with_valuation().

  Attributes:
    symbol: Ticker symbol
    price: Current share price
    growth_rate: Compound annual equity growth rate, percent (2 decimals)
    fair_value: Book-value based fair value per share
    dcf_value: Discounted cash flow value per share
  '''
  symbol: str
  price: float
  growth_rate: Optional[float] = None
  fair_value: Optional[float] = None
  dcf_value: Optional[float] = None

  def with_valuation(self, growth_rate: float, fair_value: float,
                     dcf_value: Optional[float]) -> 'MarketProfile':
    '''Return a copy with the derived valuation fields attached.'''
    return replace(self,
                   growth_rate=growth_rate,
                   fair_value=fair_value,
                   dcf_value=dcf_value)


@dataclass(frozen=True)
class CompanyStatements:
  '''
  The four documents supplied for one ticker.

  Attributes:
    symbol: Ticker symbol
    balance_sheet: Balance sheet history, newest first
    income_statement: Income statement history, newest first
    cash_flow: Cash flow statement history, newest first
    profile: Market profile
  '''
  symbol: str
  balance_sheet: StatementHistory
  income_statement: StatementHistory
  cash_flow: StatementHistory
  profile: MarketProfile

  __hash__ = None


@dataclass
class EstimateOutput(Generic[T]):
  '''
  Output of an estimator.

  Attributes:
    value: The computed value (type depends on estimator)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ValuationResult:
  '''
  Complete valuation of one ticker.

  Attributes:
    symbol: Ticker symbol
    growth_rate: Compound annual equity growth rate, percent
    fair_value: Fair value per share (book value method)
    dcf_value: DCF value per share, None if it could not be computed
    profile: Market profile with the outputs attached
    diag: Merged diagnostics from both estimators
  '''
  symbol: str
  growth_rate: float
  fair_value: float
  dcf_value: Optional[float]
  profile: MarketProfile
  diag: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a flat dictionary for DataFrame rows.'''
    result = {
        'symbol': self.symbol,
        'price': self.profile.price,
        'growth_rate': self.growth_rate,
        'fair_value': self.fair_value,
        'dcf_value': self.dcf_value,
    }
    result.update(self.diag)
    return result
