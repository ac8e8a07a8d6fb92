"""
Loader for locally stored financial-statement documents.

Reads the four JSON documents of a ticker (balance sheet, income statement,
cash flow statement and company profile) from a data directory laid out as:

  <data_dir>/<SYMBOL>/balance-sheet-statement.json
  <data_dir>/<SYMBOL>/income-statement.json
  <data_dir>/<SYMBOL>/cash-flow-statement.json
  <data_dir>/<SYMBOL>/profile.json

Statement documents are shaped like {"symbol": ..., "financials": [...]} or
are a bare list of records. Profiles are shaped like
{"symbol": ..., "profile": {"price": ...}}.

Usage:
  loader = CompanyDataLoader(data_dir=Path('data'))
  statements = loader.load_company('AAPL')
"""

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from intrinsic_value.domain.errors import ValuationError
from intrinsic_value.domain.types import (
    CompanyStatements,
    MarketProfile,
    StatementHistory,
    field_value,
)

logger = logging.getLogger(__name__)

STATEMENT_FILES = {
    'balance sheet': 'balance-sheet-statement.json',
    'income statement': 'income-statement.json',
    'cash flow': 'cash-flow-statement.json',
}
PROFILE_FILE = 'profile.json'


def _is_missing(value: Any) -> bool:
  return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def parse_statement_document(document: Any,
                             statement: str = 'statement') -> StatementHistory:
  """
  Normalize a statement document into a newest-first StatementHistory.

  Records are sorted newest-first by their 'date' field when every record
  has a parseable date; otherwise the supplied order is kept. Missing values
  are dropped so that they surface as MissingFieldError on access.

  Args:
    document: Parsed JSON document (dict with 'financials' or a list)
    statement: Statement name for error messages

  Returns:
    StatementHistory of the document's records

  Raises:
    ValueError: Document is not a list of records
  """
  records = document.get('financials') if isinstance(document,
                                                     dict) else document
  if not isinstance(records, list):
    raise ValueError(f'{statement} document has no list of financials')
  if not all(isinstance(r, dict) for r in records):
    raise ValueError(f'{statement} financials must be JSON objects')
  if not records:
    return StatementHistory((), statement)

  frame = pd.DataFrame(records)
  if 'date' in frame.columns:
    dates = pd.to_datetime(frame['date'], errors='coerce')
    if dates.notna().all():
      frame = (frame.assign(_date=dates).sort_values(
          '_date', ascending=False, kind='stable').drop(columns='_date'))

  normalized = [{k: v
                 for k, v in row.items()
                 if not _is_missing(v)}
                for row in frame.to_dict('records')]
  return StatementHistory(tuple(normalized), statement)


def parse_profile_document(document: Any, symbol: str) -> MarketProfile:
  """
  Build a MarketProfile from a profile document.

  Raises:
    ValueError: Document is malformed or has no usable price
  """
  if not isinstance(document, dict):
    raise ValueError(f'Profile document for {symbol} is not a JSON object')

  body = document.get('profile', document)
  if not isinstance(body, dict):
    raise ValueError(f'Profile document for {symbol} has no profile object')

  try:
    price = field_value(body, 'price', 'profile')
  except ValuationError as e:
    raise ValueError(f'Invalid profile for {symbol}: {e}') from e

  resolved = document.get('symbol') or body.get('symbol') or symbol
  return MarketProfile(symbol=str(resolved).upper(), price=price)


class CompanyDataLoader:
  """
  Loader for the documents of one or more tickers in a data directory.

  Nothing is cached: each call reads the files again.
  """

  def __init__(self, data_dir: Path = Path('data')):
    """
    Initialize data loader.

    Args:
      data_dir: Directory holding one sub-directory per ticker
    """
    self.data_dir = Path(data_dir)

  def company_dir(self, symbol: str) -> Path:
    """Directory holding the documents of a ticker."""
    return self.data_dir / symbol.upper()

  def _read_json(self, path: Path) -> Any:
    if not path.exists():
      raise FileNotFoundError(f'Document not found: {path}')
    with open(path, 'r', encoding='utf-8') as f:
      return json.load(f)

  def load_statement(self, symbol: str, statement: str) -> StatementHistory:
    """
    Load one statement history of a ticker.

    Args:
      symbol: Ticker symbol
      statement: One of 'balance sheet', 'income statement', 'cash flow'

    Raises:
      FileNotFoundError: Document does not exist
      OSError: Document exists but cannot be read
      ValueError: Unknown statement or malformed document
    """
    if statement not in STATEMENT_FILES:
      raise ValueError(f'Unknown statement: {statement}')
    path = self.company_dir(symbol) / STATEMENT_FILES[statement]
    history = parse_statement_document(self._read_json(path), statement)
    logger.debug('%s: loaded %d %s period(s)', symbol, len(history),
                 statement)
    return history

  def load_profile(self, symbol: str) -> MarketProfile:
    """Load the market profile of a ticker."""
    path = self.company_dir(symbol) / PROFILE_FILE
    return parse_profile_document(self._read_json(path), symbol.upper())

  def load_company(self, symbol: str) -> CompanyStatements:
    """Load all four documents of a ticker."""
    return CompanyStatements(
        symbol=symbol.upper(),
        balance_sheet=self.load_statement(symbol, 'balance sheet'),
        income_statement=self.load_statement(symbol, 'income statement'),
        cash_flow=self.load_statement(symbol, 'cash flow'),
        profile=self.load_profile(symbol),
    )


def load_company(symbol: str,
                 data_dir: Path = Path('data')) -> CompanyStatements:
  """Load all four documents of a ticker from data_dir."""
  return CompanyDataLoader(data_dir).load_company(symbol)
