"""Domain types and errors for the intrinsic value engine."""

from intrinsic_value.domain.errors import DivisionError
from intrinsic_value.domain.errors import InsufficientDataError
from intrinsic_value.domain.errors import InvalidFieldError
from intrinsic_value.domain.errors import MissingFieldError
from intrinsic_value.domain.errors import UndefinedResultError
from intrinsic_value.domain.errors import ValuationError
from intrinsic_value.domain.types import CompanyStatements
from intrinsic_value.domain.types import EstimateOutput
from intrinsic_value.domain.types import FinancialRecord
from intrinsic_value.domain.types import MarketProfile
from intrinsic_value.domain.types import StatementHistory
from intrinsic_value.domain.types import ValuationResult

__all__ = [
    'CompanyStatements',
    'EstimateOutput',
    'FinancialRecord',
    'MarketProfile',
    'StatementHistory',
    'ValuationResult',
    'ValuationError',
    'InsufficientDataError',
    'DivisionError',
    'MissingFieldError',
    'InvalidFieldError',
    'UndefinedResultError',
]
