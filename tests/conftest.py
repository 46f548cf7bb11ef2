import json
import os
from datetime import date

import pytest
from app import create_app, db
from app.services.licensing import AddonDescriptor, LicenseChecker, LicenseStore
from app.utils.options import update_json_option

TEST_CATALOG = [
    {'slug': 'time-tracker', 'edd_id': '42', 'name': 'Time Tracker'},
    {'slug': 'calendar-view', 'edd_id': '43', 'name': 'Calendar View'},
    {'slug': 'copy-project', 'edd_id': '44', 'name': 'Copy Project'},
]

TODAY = date(2026, 3, 20)


class FakeLicensingClient:
    """Stands in for LicensingClient; records every call."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {'license': 'valid'}
        self.error = error
        self.calls = []

    def check_license(self, license_key, item_id, site_url):
        self.calls.append((license_key, item_id, site_url))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def app():
    """Create and configure a test app."""
    # Ensure the app factory picks up the in-memory SQLite DB for tests
    os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
    os.environ['ENABLE_LICENSE_SCHEDULER'] = 'false'
    os.environ['SITE_URL'] = 'https://pm.example.com'
    os.environ['ADDON_CATALOG'] = json.dumps(TEST_CATALOG)
    app = create_app()
    app.config['TESTING'] = True

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def store(app):
    return LicenseStore()


@pytest.fixture
def fake_client():
    return FakeLicensingClient()


@pytest.fixture
def checker(app, store, fake_client):
    """Checker with a fixed 'today' and a fake licensing server."""
    return LicenseChecker(
        store=store,
        client=fake_client,
        site_url='https://pm.example.com',
        today=lambda: TODAY,
    )


@pytest.fixture
def installed_addons(app):
    """Activate every catalog add-on and return their descriptors."""
    update_json_option('active_plugins', [
        f"{entry['slug']}/{entry['slug']}.php" for entry in TEST_CATALOG
    ])
    return [AddonDescriptor(edd_id=e['edd_id'], slug=e['slug'], name=e['name']) for e in TEST_CATALOG]
