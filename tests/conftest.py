import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Activates the configured environment before the storefront domain is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture(autouse=True)
def fake_provider():
    """Every test signs in through an in-memory identity provider."""
    from storefront.identity import reset_provider, set_provider
    from storefront.identity.fake_adapter import FakeIdentityProvider

    provider = FakeIdentityProvider()
    set_provider(provider)

    yield provider

    reset_provider()


@pytest.fixture()
def product_id():
    """A listed product."""
    from protean import current_domain
    from storefront.catalogue.listing import AddProduct

    return current_domain.process(
        AddProduct(name="Trail Runner", price=89.99, category="Shoes", description="Lightweight running shoe"),
        asynchronous=False,
    )


@pytest.fixture()
def user_id():
    """A registered user with an empty cart."""
    from protean import current_domain
    from storefront.user.registration import RegisterUser

    return current_domain.process(
        RegisterUser(email="jane.doe@example.com", first_name="Jane", last_name="Doe"),
        asynchronous=False,
    )
