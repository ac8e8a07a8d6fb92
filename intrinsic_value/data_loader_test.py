import json
from pathlib import Path

import pytest

from intrinsic_value.data_loader import CompanyDataLoader
from intrinsic_value.data_loader import load_company
from intrinsic_value.data_loader import parse_profile_document
from intrinsic_value.data_loader import parse_statement_document
from intrinsic_value.domain.errors import MissingFieldError
from intrinsic_value.domain.types import StatementHistory


class TestParseStatementDocument:
  """Tests for parse_statement_document."""

  def test_financials_document(self):
    document = {
        'symbol': 'KO',
        'financials': [
            {'date': '2019-12-31', 'Free Cash Flow': '8417000000.0'},
            {'date': '2018-12-31', 'Free Cash Flow': '6942000000.0'},
        ],
    }

    history = parse_statement_document(document, 'cash flow')

    assert isinstance(history, StatementHistory)
    assert history.statement == 'cash flow'
    assert history.value('Free Cash Flow') == 8417000000.0

  def test_bare_list(self):
    history = parse_statement_document([{'Free Cash Flow': 1}])

    assert len(history) == 1

  def test_sorted_newest_first(self):
    """Oldest-first input is reordered by date."""
    document = [
        {'date': '2017-12-31', 'Total shareholders equity': 100},
        {'date': '2019-12-31', 'Total shareholders equity': 121},
        {'date': '2018-12-31', 'Total shareholders equity': 110},
    ]

    history = parse_statement_document(document, 'balance sheet')

    assert [r['date'] for r in history] == [
        '2019-12-31', '2018-12-31', '2017-12-31'
    ]
    assert history.value('Total shareholders equity') == 121.0

  def test_order_kept_without_dates(self):
    document = [{'Net Income': 3}, {'Net Income': 1}, {'Net Income': 2}]

    history = parse_statement_document(document)

    assert [r['Net Income'] for r in history] == [3, 1, 2]

  def test_missing_values_dropped(self):
    """Gaps in one record surface as MissingFieldError on access."""
    document = [
        {'date': '2019-12-31', 'Free Cash Flow': 5},
        {'date': '2018-12-31', 'Net Income': 7},
    ]

    history = parse_statement_document(document, 'cash flow')

    assert 'Net Income' not in history[0]
    with pytest.raises(MissingFieldError):
      history.value('Free Cash Flow', 1)

  def test_empty_financials(self):
    history = parse_statement_document({'financials': []}, 'cash flow')

    assert len(history) == 0

  @pytest.mark.parametrize('document', [
      {'symbol': 'KO'},
      {'financials': 'nope'},
      'text',
      [1, 2],
  ])
  def test_malformed(self, document):
    with pytest.raises(ValueError):
      parse_statement_document(document)


class TestParseProfileDocument:
  """Tests for parse_profile_document."""

  def test_nested_profile(self):
    profile = parse_profile_document(
        {
            'symbol': 'KO',
            'profile': {
                'price': 58.2
            }
        }, 'KO')

    assert profile.symbol == 'KO'
    assert profile.price == 58.2

  def test_string_price(self):
    profile = parse_profile_document({'profile': {'price': '58.20'}}, 'ko')

    assert profile.symbol == 'KO'
    assert profile.price == 58.2

  def test_flat_profile(self):
    profile = parse_profile_document({'symbol': 'KO', 'price': 58.2}, 'KO')

    assert profile.price == 58.2

  def test_missing_price(self):
    with pytest.raises(ValueError, match='Invalid profile for KO'):
      parse_profile_document({'profile': {'beta': 0.5}}, 'KO')

  def test_not_an_object(self):
    with pytest.raises(ValueError):
      parse_profile_document([], 'KO')


class TestCompanyDataLoader:
  """Tests for CompanyDataLoader."""

  def test_default_data_dir(self):
    assert CompanyDataLoader().data_dir == Path('data')

  def test_load_company(self, write_company):
    data_dir = write_company('ACME')

    statements = CompanyDataLoader(data_dir).load_company('acme')

    assert statements.symbol == 'ACME'
    assert statements.profile.price == 30.0
    assert len(statements.balance_sheet) == 2
    assert len(statements.income_statement) == 3
    assert len(statements.cash_flow) == 1
    assert statements.balance_sheet.statement == 'balance sheet'

  def test_load_company_function(self, write_company):
    data_dir = write_company('ACME')

    statements = load_company('ACME', data_dir)

    assert statements.income_statement.value('Net Income', 2) == 20.0

  def test_missing_document(self, write_company, sample_documents):
    del sample_documents['cash flow']
    data_dir = write_company('ACME', sample_documents)

    with pytest.raises(FileNotFoundError, match='cash-flow-statement.json'):
      load_company('ACME', data_dir)

  def test_unknown_symbol(self, tmp_path):
    with pytest.raises(FileNotFoundError):
      load_company('NOPE', tmp_path)

  def test_invalid_json(self, write_company):
    data_dir = write_company('ACME')
    (data_dir / 'ACME' / 'profile.json').write_text('{not json',
                                                     encoding='utf-8')

    with pytest.raises(ValueError):
      load_company('ACME', data_dir)

  def test_unknown_statement(self, tmp_path):
    with pytest.raises(ValueError, match='Unknown statement'):
      CompanyDataLoader(tmp_path).load_statement('ACME', 'ledger')

  def test_reads_files_each_time(self, write_company, sample_documents):
    """Nothing is cached between calls."""
    data_dir = write_company('ACME')
    loader = CompanyDataLoader(data_dir)
    first = loader.load_profile('ACME')

    sample_documents['profile']['profile']['price'] = 31.0
    (data_dir / 'ACME' / 'profile.json').write_text(json.dumps(
        sample_documents['profile']),
                                                     encoding='utf-8')

    assert first.price == 30.0
    assert loader.load_profile('ACME').price == 31.0
