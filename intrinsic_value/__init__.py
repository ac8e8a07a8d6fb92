'''
Intrinsic value calculator.

Turns per-company financial-statement histories into three metrics: a
compound annual equity growth rate, a book-value based fair value per share
and a discounted cash flow value per share. The math lives in pure engine
functions; estimators read statement line items and chain the two steps.

Usage:
  from intrinsic_value.data_loader import load_company
  from intrinsic_value.run import run_valuation

  statements = load_company('KO', data_dir=Path('data'))
  result = run_valuation(statements)
  print(result.growth_rate, result.fair_value, result.dcf_value)
'''
