'''
Single-company valuation entrypoint.

This module provides the main entry point for running valuations. It:
1. Estimates equity growth and fair value from balance sheet history
2. Feeds the rounded growth rate into the DCF estimator
3. Attaches the three outputs to the company's market profile
4. Returns ValuationResult with full diagnostics

Usage:
  from intrinsic_value.data_loader import load_company
  from intrinsic_value.run import run_valuation
  from intrinsic_value.scenarios.config import ScenarioConfig

  statements = load_company('AAPL', data_dir=Path('data'))
  result = run_valuation(statements, config=ScenarioConfig.default())
  print(f"Fair value: ${result.fair_value:.2f}")
'''

import argparse
import logging
from pathlib import Path
import sys
from typing import Any, Dict, Optional

from intrinsic_value.data_loader import load_company
from intrinsic_value.domain.errors import ValuationError
from intrinsic_value.domain.types import CompanyStatements, ValuationResult
from intrinsic_value.estimators.dcf import compute_dcf
from intrinsic_value.estimators.fair_value import compute_growth_and_fair_value
from intrinsic_value.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)


def run_valuation(
    statements: CompanyStatements,
    config: Optional[ScenarioConfig] = None,
    strict: bool = True,
) -> ValuationResult:
  '''
  Run both estimators for a single ticker.

  Args:
    statements: The four documents of the ticker
    config: ScenarioConfig (default: ScenarioConfig.default())
    strict: If False, a DCF failure leaves dcf_value as None and records
      the error in diag['dcf_error'] instead of raising

  Returns:
    ValuationResult with the updated profile and diagnostics

  Raises:
    ValuationError: Growth and fair value cannot be estimated, or the DCF
      fails in strict mode
  '''
  if config is None:
    config = ScenarioConfig.default()

  symbol = statements.symbol
  all_diag: Dict[str, Any] = {'scenario': config.name}

  fv_result = compute_growth_and_fair_value(
      statements.balance_sheet,
      statements.income_statement,
      risk_free_rate=config.risk_free_rate,
      lookback_years=config.lookback_years,
      projection_years=config.projection_years,
  )
  fair_value, growth_rate = fv_result.value
  all_diag.update({f'fv_{k}': v for k, v in fv_result.diag.items()})

  dcf_value: Optional[float] = None
  try:
    dcf_result = compute_dcf(
        statements.cash_flow,
        statements.income_statement,
        growth_rate=growth_rate,
        discount_rate=config.discount_rate,
        inflation_rate=config.inflation_rate,
        projection_years=config.projection_years,
    )
  except ValuationError as e:
    if strict:
      raise
    logger.warning('%s: DCF not available: %s', symbol, e)
    all_diag['dcf_error'] = str(e)
  else:
    dcf_value = dcf_result.value
    all_diag.update({f'dcf_{k}': v for k, v in dcf_result.diag.items()})

  profile = statements.profile.with_valuation(
      growth_rate=growth_rate,
      fair_value=fair_value,
      dcf_value=dcf_value,
  )

  return ValuationResult(
      symbol=symbol,
      growth_rate=growth_rate,
      fair_value=fair_value,
      dcf_value=dcf_value,
      profile=profile,
      diag=all_diag,
  )


def build_config(args: argparse.Namespace) -> ScenarioConfig:
  '''Load the scenario config and apply CLI overrides.'''
  config = (ScenarioConfig.from_file(args.config)
            if args.config else ScenarioConfig.default())

  overrides = {
      'risk_free_rate': args.risk_free_rate,
      'discount_rate': args.discount_rate,
      'inflation_rate': args.inflation_rate,
  }
  data = config.to_dict()
  data.update({k: v for k, v in overrides.items() if v is not None})
  return ScenarioConfig.from_dict(data)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
  '''Register the arguments shared by the valuation CLIs.'''
  parser.add_argument('--data-dir',
                      type=Path,
                      default=Path('data'),
                      help='Directory with one sub-directory per ticker')
  parser.add_argument('--config',
                      type=Path,
                      default=None,
                      help='Scenario config JSON file')
  parser.add_argument('--risk-free-rate',
                      type=float,
                      default=None,
                      help='10-year bond rate in percent (default: 2)')
  parser.add_argument('--discount-rate',
                      type=float,
                      default=None,
                      help='Discount rate in percent (default: 10)')
  parser.add_argument('--inflation-rate',
                      type=float,
                      default=None,
                      help='Inflation rate in percent (default: 3)')
  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Verbose output')


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Run intrinsic valuation')
  parser.add_argument('--symbol',
                      type=str,
                      required=True,
                      help='Ticker symbol')
  add_config_arguments(parser)
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  config = build_config(args)
  try:
    statements = load_company(args.symbol, args.data_dir)
    result = run_valuation(statements, config=config, strict=False)
  except (OSError, ValueError, ValuationError) as e:
    logger.error('Failed to value %s: %s', args.symbol, e)
    sys.exit(1)

  separator = '=' * 70
  logger.info(separator)
  logger.info('Intrinsic Value - %s', result.symbol)
  logger.info('Scenario: %s', config.name)
  logger.info(separator)

  logger.info('\nRate Inputs:')
  logger.info('  Risk-free Rate: %.2f%%', config.risk_free_rate)
  logger.info('  Discount Rate: %.2f%%', config.discount_rate)
  logger.info('  Inflation Rate: %.2f%%', config.inflation_rate)

  logger.info('\nValuation Result:')
  logger.info('  Current Price: $%.2f', result.profile.price)
  logger.info('  Equity Growth: %.2f%%', result.growth_rate)
  logger.info('  Fair Value: $%.2f', result.fair_value)
  if result.dcf_value is None:
    logger.info('  DCF Value: N/A (%s)', result.diag.get('dcf_error'))
  else:
    logger.info('  DCF Value: $%.2f', result.dcf_value)

  logger.info(separator)


if __name__ == '__main__':
  main()
