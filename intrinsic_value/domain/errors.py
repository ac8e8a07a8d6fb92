'''
Error types raised by the valuation engine.

The engine never returns NaN or infinity. Every condition that would produce
one is raised as a subclass of ValuationError so that callers can decide how
to present a failed ticker.
'''

from typing import Optional


class ValuationError(Exception):
  '''Base class for all valuation failures.'''


class InsufficientDataError(ValuationError):
  '''Fewer historical periods than a computation requires.'''


class DivisionError(ValuationError, ZeroDivisionError):
  '''A required denominator is zero.'''


class UndefinedResultError(ValuationError, ArithmeticError):
  '''Result is undefined over the reals, overflows, or is not finite.'''


class MissingFieldError(ValuationError, LookupError):
  '''
  An expected line item is absent from a financial record.

  Attributes:
    field_name: Line-item name that was looked up
    statement: Statement the record belongs to (e.g. 'balance sheet')
    period: Index of the record, 0 being the most recent period
  '''

  def __init__(self,
               field_name: str,
               statement: str = 'statement',
               period: Optional[int] = None):
    self.field_name = field_name
    self.statement = statement
    self.period = period
    where = statement if period is None else f'{statement} period {period}'
    super().__init__(f'Missing "{field_name}" in {where}')


class InvalidFieldError(ValuationError, ValueError):
  '''A line item is present but not a finite number.'''
