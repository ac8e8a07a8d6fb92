'''
Batch valuation for multiple tickers.

This module provides tools to:
1. Run valuations for multiple tickers at once
2. Keep one failing ticker from affecting the others
3. Export results to CSV for further analysis

Every ticker gets a row. Values that could not be computed are NaN (shown
as N/A) and the reason is stored in the 'error' column.

Usage (CLI):
  python -m intrinsic_value.analysis.batch_valuation \
    --symbols AAPL MSFT KO \
    --data-dir data \
    --risk-free-rate 4.2 \
    --output results/valuation.csv

Usage (Python API):
  from intrinsic_value.analysis.batch_valuation import batch_valuation
  from intrinsic_value.scenarios.config import ScenarioConfig

  df = batch_valuation(
    symbols=['AAPL', 'MSFT'],
    data_dir=Path('data'),
    config=ScenarioConfig.default(),
  )
'''

import argparse
from concurrent.futures import ThreadPoolExecutor
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from intrinsic_value.analysis.market_metrics import compute_market_metrics
from intrinsic_value.data_loader import CompanyDataLoader
from intrinsic_value.domain.errors import ValuationError
from intrinsic_value.run import add_config_arguments
from intrinsic_value.run import build_config
from intrinsic_value.run import run_valuation
from intrinsic_value.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)

COLUMNS = [
    'symbol',
    'price',
    'eps',
    'pe_ratio',
    'net_income_2',
    'net_income_1',
    'net_income_0',
    'dividend_yield',
    'growth_rate',
    'fair_value',
    'dcf_value',
    'error',
]


def value_symbol(
    symbol: str,
    loader: CompanyDataLoader,
    config: ScenarioConfig,
) -> Dict[str, Any]:
  '''
  Value one ticker and return its table row.

  Loader and valuation failures are recorded in the row instead of raised.
  '''
  row: Dict[str, Any] = {'symbol': symbol.upper()}
  errors: List[str] = []

  try:
    statements = loader.load_company(symbol)
  except (OSError, ValueError) as e:
    logger.warning('Failed to load %s: %s', symbol, e)
    row['error'] = str(e)
    return row

  row['price'] = statements.profile.price

  try:
    metrics = compute_market_metrics(statements.income_statement,
                                     statements.profile.price)
    row.update(metrics.to_dict())
  except ValuationError as e:
    logger.warning('%s: market metrics not available: %s', symbol, e)
    errors.append(f'metrics: {e}')

  try:
    result = run_valuation(statements, config=config, strict=False)
    row.update(result.to_dict())
    if 'dcf_error' in result.diag:
      errors.append(f'dcf: {result.diag["dcf_error"]}')
  except ValuationError as e:
    logger.warning('%s: valuation failed: %s', symbol, e)
    errors.append(f'valuation: {e}')

  if errors:
    row['error'] = '; '.join(errors)
  return row


def batch_valuation(
    symbols: List[str],
    data_dir: Path = Path('data'),
    config: Optional[ScenarioConfig] = None,
    workers: int = 1,
) -> pd.DataFrame:
  '''
  Run valuation for multiple tickers.

  Args:
    symbols: List of ticker symbols
    data_dir: Directory with one sub-directory per ticker
    config: ScenarioConfig (default: ScenarioConfig.default())
    workers: Number of threads; 1 values tickers sequentially

  Returns:
    DataFrame with one row per symbol in input order. Known columns come
    first (see COLUMNS), followed by the estimator diagnostics.
  '''
  if config is None:
    config = ScenarioConfig.default()
  loader = CompanyDataLoader(data_dir)

  if workers > 1:
    with ThreadPoolExecutor(max_workers=workers) as executor:
      rows = list(
          executor.map(lambda s: value_symbol(s, loader, config), symbols))
  else:
    rows = [value_symbol(s, loader, config) for s in symbols]

  df = pd.DataFrame(rows)
  extra = [c for c in df.columns if c not in COLUMNS]
  return df.reindex(columns=COLUMNS + extra)


def _load_symbols_from_file(file_path: Path) -> List[str]:
  '''Load ticker symbols from text file (one per line, # for comments).'''
  with open(file_path, 'r', encoding='utf-8') as f:
    symbols = [
        line.strip() for line in f
        if line.strip() and not line.strip().startswith('#')
    ]
  return symbols


def _print_summary(df: pd.DataFrame) -> None:
  '''Print summary statistics for batch valuation results.'''
  total = len(df)
  valued = df[df['fair_value'].notna()]

  logger.info('')
  logger.info('=' * 70)
  logger.info('Summary Statistics')
  logger.info('=' * 70)
  logger.info('Total companies: %d', total)
  logger.info('Valued: %d', len(valued))
  logger.info('With DCF value: %d', df['dcf_value'].notna().sum())

  if valued.empty:
    logger.info('=' * 70)
    return

  fair_values = valued['fair_value'].astype(float)
  logger.info('')
  logger.info('Fair Value:')
  logger.info('  Median: $%.2f', fair_values.median())
  logger.info('  Min:    $%.2f (%s)', fair_values.min(),
              valued.loc[fair_values.idxmin(), 'symbol'])
  logger.info('  Max:    $%.2f (%s)', fair_values.max(),
              valued.loc[fair_values.idxmax(), 'symbol'])

  undervalued = valued[valued['price'].astype(float) < fair_values]
  logger.info('')
  logger.info('Price below fair value: %d / %d', len(undervalued), len(valued))
  for _, row in undervalued.iterrows():
    logger.info('  %s: Price=$%.2f, FV=$%.2f', row['symbol'], row['price'],
                row['fair_value'])

  logger.info('=' * 70)


def main() -> None:
  '''CLI entrypoint for batch valuation.'''
  parser = argparse.ArgumentParser(
      description='Batch valuation for multiple tickers',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__,
  )

  symbol_group = parser.add_mutually_exclusive_group(required=True)
  symbol_group.add_argument('--symbols',
                            nargs='+',
                            help='Space-separated ticker symbols')
  symbol_group.add_argument('--symbols-file',
                            type=Path,
                            help='File with ticker symbols (one per line)')

  parser.add_argument('--output',
                      type=Path,
                      default=None,
                      help='Output CSV file path')
  parser.add_argument('--workers',
                      type=int,
                      default=1,
                      help='Number of worker threads (default: 1)')
  add_config_arguments(parser)

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  if args.symbols:
    symbols = args.symbols
  else:
    symbols = _load_symbols_from_file(args.symbols_file)
    logger.info('Loaded %d symbols from %s', len(symbols), args.symbols_file)

  config = build_config(args)
  logger.info('Using scenario: %s', config.name)

  results = batch_valuation(
      symbols=symbols,
      data_dir=args.data_dir,
      config=config,
      workers=args.workers,
  )

  logger.info('\n%s', results[COLUMNS].to_string(index=False, na_rep='N/A'))

  if args.output:
    args.output.parent.mkdir(parents=True, exist_ok=True)
    results.to_csv(args.output, index=False)
    logger.info('Saved %d results to %s', len(results), args.output)

  _print_summary(results)


if __name__ == '__main__':
  main()
