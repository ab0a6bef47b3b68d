"""
Shared fixtures for OrgChart Interchange tests
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.models import (
    Division,
    EmployeeType,
    Group,
    Location,
    Person,
    Portfolio,
    Role,
    Team,
)


def counter_ids(prefix: str = "id"):
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def strip_ids(value):
    """Drop every 'id' key from a serialized org structure."""
    if isinstance(value, dict):
        return {k: strip_ids(v) for k, v in value.items() if k != 'id'}
    if isinstance(value, list):
        return [strip_ids(v) for v in value]
    return value


def build_sample_portfolio() -> Portfolio:
    """
    Payments (60% onshore target)
      Head: Ada Lovelace, Principal: Alan Turing [contractor, nearshore, Acme]
      Division Core / group Ledger (manager Grace Hopper)
        Settlement: 3x Senior Engineer [contractor, offshore, TCS], Linus Torvalds
        Reconciliation: Ken Thompson (Staff Engineer), Dennis Ritchie
      Direct group Checkout (managed by TPM, staff Barbara Liskov)
        Basket: empty
    """
    seniors = [
        Person(id=f"sen-{i}", role=Role.SENIOR_ENGINEER, type=EmployeeType.CONTRACTOR,
               location=Location.OFFSHORE, vendor="TCS")
        for i in range(1, 4)
    ]
    settlement = Team(id="t-settlement", name="Settlement", members=seniors + [
        Person(id="linus", role=Role.ENGINEER, name="Linus Torvalds"),
    ])
    reconciliation = Team(id="t-recon", name="Reconciliation", members=[
        Person(id="ken", role=Role.STAFF_ENGINEER, name="Ken Thompson"),
        Person(id="dennis", role=Role.ENGINEER, name="Dennis Ritchie"),
    ])
    ledger = Group(
        id="g-ledger",
        name="Ledger",
        manager=Person(id="grace", role=Role.ENGINEERING_MANAGER, name="Grace Hopper"),
        teams=[settlement, reconciliation],
    )
    checkout = Group(
        id="g-checkout",
        name="Checkout",
        managed_by="TPM",
        staff_engineers=[Person(id="barbara", role=Role.STAFF_ENGINEER, name="Barbara Liskov")],
        teams=[Team(id="t-basket", name="Basket")],
    )
    return Portfolio(
        id="p-payments",
        name="Payments",
        head_of_engineering=Person(id="ada", role=Role.HEAD_OF_ENGINEERING, name="Ada Lovelace"),
        principal_engineers=[
            Person(id="alan", role=Role.PRINCIPAL_ENGINEER, type=EmployeeType.CONTRACTOR,
                   location=Location.NEARSHORE, name="Alan Turing", vendor="Acme"),
        ],
        divisions=[Division(id="d-core", name="Core", groups=[ledger])],
        groups=[checkout],
        onshore_target_percentage=60,
    )


SAMPLE_MARKDOWN = """# Payments (60% onshore target)

Head of Engineering: Ada Lovelace
Principal Engineer: Alan Turing [contractor, nearshore, Acme]

## Division: Core

### Ledger
Manager: Grace Hopper

#### Settlement
- 3x Senior Engineer [contractor, offshore, TCS]
- Linus Torvalds, Engineer

#### Reconciliation
- Ken Thompson, Staff Engineer
- Dennis Ritchie, Engineer

## Checkout
Managed by: TPM
Staff: Barbara Liskov

### Basket
"""


@pytest.fixture
def sample_portfolio():
    return build_sample_portfolio()


@pytest.fixture
def ids():
    return counter_ids()
