"""
Org JSON Serialization Tests
============================
Run with: pytest tests/test_serialization.py -v
"""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.models import Location, OrgData, Portfolio
from orgchart.serialization import (
    OrgDataError,
    load_org_data,
    org_data_from_dict,
    org_data_to_dict,
    person_from_dict,
    portfolio_from_dict,
    portfolio_from_json,
    portfolio_to_dict,
    save_org_data,
    select_portfolio,
)


def test_round_trip(sample_portfolio):
    org = OrgData(portfolios=[sample_portfolio])
    assert org_data_from_dict(org_data_to_dict(org)) == org


def test_camel_case_keys(sample_portfolio):
    data = portfolio_to_dict(sample_portfolio)

    assert data['onshoreTargetPercentage'] == 60
    assert data['headOfEngineering']['name'] == "Ada Lovelace"
    assert data['principalEngineers'][0]['vendor'] == "Acme"
    group = data['groups'][0]
    assert group['managedBy'] == "TPM"
    assert group['staffEngineers'][0]['role'] == "staff_engineer"
    assert 'manager' not in group


def test_missing_location_loads_onshore():
    person = person_from_dict({'id': '1', 'role': 'engineer', 'type': 'contractor'})
    assert person.location == Location.ONSHORE


def test_invalid_data_raises():
    with pytest.raises(OrgDataError, match=r"role: .*\(got 'wizard'\)"):
        person_from_dict({'id': '1', 'role': 'wizard'})

    with pytest.raises(OrgDataError, match="portfolio: id: missing required field"):
        portfolio_from_dict({'name': 'No id'})

    with pytest.raises(OrgDataError):
        org_data_from_dict({'portfolios': 'nope'})


def test_wrongly_typed_fields_raise(sample_portfolio):
    data = portfolio_to_dict(sample_portfolio)
    data['groups'][0]['teams'][0]['name'] = 123

    with pytest.raises(OrgDataError, match=r"groups\.0\.teams\.0\.name: .*\(got 123\)"):
        portfolio_from_dict(data)

    data = portfolio_to_dict(sample_portfolio)
    data['onshoreTargetPercentage'] = "most"
    with pytest.raises(OrgDataError, match="onshoreTargetPercentage"):
        portfolio_from_dict(data)

    with pytest.raises(OrgDataError, match="portfolios.0"):
        org_data_from_dict({'portfolios': [1]})


def test_portfolio_from_json(sample_portfolio):
    text = json.dumps(portfolio_to_dict(sample_portfolio))
    assert portfolio_from_json(text) == sample_portfolio

    with pytest.raises(OrgDataError, match="upload: "):
        portfolio_from_json("{not json", "upload")


def test_save_and_load(tmp_path, sample_portfolio):
    path = save_org_data(OrgData(portfolios=[sample_portfolio]), tmp_path / "out" / "org.json")
    loaded = load_org_data(path)
    assert loaded.portfolios[0] == sample_portfolio


def test_load_single_portfolio_document(tmp_path, sample_portfolio):
    path = tmp_path / "payments.json"
    path.write_text(json.dumps(portfolio_to_dict(sample_portfolio)))

    org = load_org_data(path)
    assert [p.name for p in org.portfolios] == ["Payments"]


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_org_data(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(OrgDataError):
        load_org_data(bad)

    not_portfolios = tmp_path / "numbers.json"
    not_portfolios.write_text(json.dumps({"portfolios": [1]}))
    with pytest.raises(OrgDataError, match="numbers.json: portfolios.0"):
        load_org_data(not_portfolios)

    not_an_object = tmp_path / "list.json"
    not_an_object.write_text("[1, 2]")
    with pytest.raises(OrgDataError):
        load_org_data(not_an_object)


def test_select_portfolio(sample_portfolio):
    other = Portfolio(id="p-other", name="Retail")
    org = OrgData(portfolios=[sample_portfolio, other])

    assert select_portfolio(org, "retail") is other
    assert select_portfolio(org, "p-payments") is sample_portfolio
    with pytest.raises(OrgDataError):
        select_portfolio(org)
    with pytest.raises(OrgDataError):
        select_portfolio(org, "Unknown")
