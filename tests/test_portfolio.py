from datetime import date
from decimal import Decimal

import pytest

from conftest import company_lookup, make_company, make_dci, make_deal, make_transaction, make_valuation, valuation_lookup
from investor_portfolio.logic.deal_metrics import compute_deal_metrics
from investor_portfolio.logic.metrics import calculate_irr
from investor_portfolio.logic.portfolio import aggregate_portfolio


def _evaluate(*transactions, valuations=()):
    lookup = valuation_lookup(*valuations)
    return [(tx, compute_deal_metrics(tx, lookup, company_lookup())) for tx in transactions]


def _single(company_id, net_capital, entry, tx_date):
    company = make_company(company_id, f"Co{company_id}")
    deal = make_deal(id=company_id, deal_company_investments=[make_dci(company, Decimal("1"), Decimal(entry))])
    return make_transaction(deal, Decimal(net_capital), tx_date)


def test_single_deal_portfolio_doubles():
    tx = _single(1, "100000", "1000000", date(2024, 1, 10))

    summary = aggregate_portfolio(_evaluate(tx, valuations=[make_valuation(1, "2000000")]))

    assert summary.total_invested == Decimal("100000")
    assert summary.total_current_value == Decimal("200000")
    assert summary.moic == 2
    assert summary.total_return_percent == 100
    assert summary.capital_earned == Decimal("100000")
    assert summary.first_investment_date == date(2024, 1, 10)


def test_empty_portfolio_moic_is_zero():
    summary = aggregate_portfolio([])

    assert summary.moic == 0
    assert summary.total_return_percent == 0
    assert summary.capital_earned == 0
    assert summary.first_investment_date is None


def test_zero_invested_portfolio_moic_is_zero_while_deal_moic_is_one():
    tx = make_transaction(make_deal(), None)
    results = _evaluate(tx)

    assert results[0][1].moic == 1
    assert aggregate_portfolio(results).moic == 0


def test_sums_and_first_date_ignore_ordering():
    txs = [
        _single(1, "100000", "1000000", date(2024, 5, 1)),
        _single(2, "50000", "500000", date(2022, 11, 30)),
        make_transaction(make_deal(id=3), Decimal("25000"), date(2023, 7, 4)),
    ]
    valuations = [make_valuation(1, "1500000"), make_valuation(2, "250000")]

    forward = aggregate_portfolio(_evaluate(*txs, valuations=valuations))
    backward = aggregate_portfolio(_evaluate(*reversed(txs), valuations=valuations))

    assert forward == backward
    assert forward.first_investment_date == date(2022, 11, 30)
    # 150,000 + 25,000 + 25,000 on 175,000 invested
    assert forward.total_current_value == Decimal("200000")


def test_irr_for_one_year_double():
    tx = _single(1, "100000", "1000000", date(2023, 1, 1))
    results = _evaluate(tx, valuations=[make_valuation(1, "2000000")])

    irr = calculate_irr(results, aggregate_portfolio(results), as_of=date(2024, 1, 1))

    assert irr == pytest.approx(1.0, rel=1e-6)


def test_irr_without_investments_is_none():
    assert calculate_irr([], aggregate_portfolio([]), as_of=date(2024, 1, 1)) is None


def test_irr_for_same_day_gain_is_none():
    tx = _single(1, "100", "100", date(2024, 1, 1))
    results = _evaluate(tx, valuations=[make_valuation(1, "200")])

    assert calculate_irr(results, aggregate_portfolio(results), as_of=date(2024, 1, 1)) is None
