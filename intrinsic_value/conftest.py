import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from intrinsic_value.data_loader import PROFILE_FILE
from intrinsic_value.data_loader import STATEMENT_FILES
from intrinsic_value.domain.types import CompanyStatements
from intrinsic_value.domain.types import MarketProfile
from intrinsic_value.domain.types import StatementHistory


def _make_documents(symbol: str) -> Dict[str, Any]:
  """Documents shaped like the data provider's payloads (values as strings).

  Equity grows 100 -> 110 over one year, 10 shares, 1.00 dividend and
  100 free cash flow, so that:
  - growth rate = 10.00%
  - fair value = 11 * 1.1^10 + 10 / 1.02^10 = 36.7347
  - DCF value = (1000 + 100 / 0.07) / 10 = 242.857
  """
  return {
      'balance sheet': {
          'symbol': symbol,
          'financials': [
              {'date': '2019-12-31', 'Total shareholders equity': '110'},
              {'date': '2018-12-31', 'Total shareholders equity': '100'},
          ],
      },
      'income statement': {
          'symbol': symbol,
          'financials': [
              {
                  'date': '2019-12-31',
                  'Weighted Average Shs Out (Dil)': '10',
                  'Dividend per Share': '1.0',
                  'EPS Diluted': '2.5',
                  'Net Income': '25',
              },
              {
                  'date': '2018-12-31',
                  'Weighted Average Shs Out (Dil)': '10',
                  'Dividend per Share': '0.9',
                  'EPS Diluted': '2.2',
                  'Net Income': '22',
              },
              {
                  'date': '2017-12-31',
                  'Weighted Average Shs Out (Dil)': '10',
                  'Dividend per Share': '0.8',
                  'EPS Diluted': '2.0',
                  'Net Income': '20',
              },
          ],
      },
      'cash flow': {
          'symbol': symbol,
          'financials': [
              {'date': '2019-12-31', 'Free Cash Flow': '100'},
          ],
      },
      'profile': {
          'symbol': symbol,
          'profile': {'price': 30.0, 'companyName': 'Acme Corp'},
      },
  }


@pytest.fixture
def sample_documents() -> Dict[str, Any]:
  """Raw documents for ticker ACME."""
  return _make_documents('ACME')


@pytest.fixture
def sample_statements(sample_documents) -> CompanyStatements:
  """ACME documents as domain types."""
  return CompanyStatements(
      symbol='ACME',
      balance_sheet=StatementHistory(
          tuple(sample_documents['balance sheet']['financials']),
          'balance sheet'),
      income_statement=StatementHistory(
          tuple(sample_documents['income statement']['financials']),
          'income statement'),
      cash_flow=StatementHistory(
          tuple(sample_documents['cash flow']['financials']), 'cash flow'),
      profile=MarketProfile(symbol='ACME', price=30.0),
  )


@pytest.fixture
def write_company(tmp_path) -> Callable[..., Path]:
  """Factory writing a ticker's documents under tmp_path.

  Usage: write_company('ACME') or write_company('ACME', documents).
  Returns the data directory.
  """

  def _write(symbol: str,
             documents: Optional[Dict[str, Any]] = None) -> Path:
    if documents is None:
      documents = _make_documents(symbol)
    company_dir = tmp_path / symbol
    company_dir.mkdir(parents=True, exist_ok=True)
    for statement, filename in STATEMENT_FILES.items():
      if statement in documents:
        (company_dir / filename).write_text(json.dumps(documents[statement]),
                                            encoding='utf-8')
    if 'profile' in documents:
      (company_dir / PROFILE_FILE).write_text(json.dumps(documents['profile']),
                                              encoding='utf-8')
    return tmp_path

  return _write
