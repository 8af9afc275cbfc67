import pytest
from fastapi.testclient import TestClient

from billsplit.api.v1.endpoints.bill import get_bill
from billsplit.main import app
from billsplit.models.entities import Bill, Dish, Person, Tax, TaxKind
from billsplit.services.bill_splitter import BillSplitterService


@pytest.fixture
def service():
    return BillSplitterService()


@pytest.fixture
def bill():
    return Bill()


@pytest.fixture
def alice():
    return Person(name="Alice")


@pytest.fixture
def bob():
    return Person(name="Bob")


@pytest.fixture
def vat():
    return Tax(name="VAT", kind=TaxKind.PERCENTAGE, value=10)


@pytest.fixture
def pizza(alice, bob):
    return Dish(name="Pizza", price=20, shared_by=[alice.id, bob.id])


@pytest.fixture
def client():
    """API client working on its own empty bill"""
    test_bill = Bill()
    app.dependency_overrides[get_bill] = lambda: test_bill
    # TrustedHostMiddleware only accepts the configured hosts
    with TestClient(app, base_url="http://localhost") as test_client:
        yield test_client
    app.dependency_overrides.clear()
