"""
Shared fixtures: app against a throwaway SQLite file, test client, sample contracts
"""

import pytest

from lease_compliance import database
from lease_compliance.app import create_app
from lease_compliance.lease_accounting.core.models import LeaseContract


@pytest.fixture(scope='session')
def log_dir(tmp_path_factory):
    return tmp_path_factory.mktemp('logs')


@pytest.fixture
def app(tmp_path, log_dir):
    app = create_app(
        'testing',
        DATABASE_PATH=str(tmp_path / 'lease_compliance_test.db'),
        LOG_DIR=str(log_dir),
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def office_lease(app):
    """Stored contract: $100,000 office lease"""
    return database.create_contract(
        name='Office Lease', amount=100000, vendor='Acme Properties',
        type='Lease', payment_terms='Annually'
    )


@pytest.fixture
def equipment_lease(app):
    """Stored contract: $50,000 equipment lease"""
    return database.create_contract(
        name='Equipment Lease', amount=50000, vendor='Forklift Co',
        type='Lease', payment_terms='Monthly'
    )


@pytest.fixture
def contract():
    """In-memory contract for the journal generator"""
    return LeaseContract(id=7, name='Warehouse Lease', amount=50000.0)
