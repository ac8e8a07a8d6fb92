'''Valuation engine with pure math functions.'''

from intrinsic_value.engine.dcf import (
    compute_dcf_value,
    compute_perpetuity_value,
    compute_pv_explicit,
)
from intrinsic_value.engine.fair_value import (
    compute_book_value_per_share,
    compute_equity_cagr,
    compute_fair_value,
    round_percent,
)

__all__ = [
    'compute_book_value_per_share',
    'compute_dcf_value',
    'compute_equity_cagr',
    'compute_fair_value',
    'compute_perpetuity_value',
    'compute_pv_explicit',
    'round_percent',
]
