"""
Root pytest configuration and fixtures.

Browser tests start pre-authenticated: the session-scoped ``auth_state``
fixture is the bootstrap step. It reuses the cached storage state when its
cookies are still valid and otherwise logs in once and captures a fresh one.
Every browser context is then seeded from that file.

Unit tests under ``tests/unit`` use none of these fixtures and never launch a
browser.
"""
import logging
import sys
from pathlib import Path

import pytest
from playwright.sync_api import Page, expect

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pages.login_page import LoginPage
from services.session_cache import ensure_session_state
from utils import timeouts
from utils.api_helpers import create_request_context
from utils.env import (
    get_api_base_url,
    get_auth_state_path,
    get_base_url,
    get_test_credentials,
    load_environment,
)

logger = logging.getLogger(__name__)

load_environment()


def pytest_configure(config):
    expect.set_options(timeout=timeouts.MEDIUM)


def pytest_collection_modifyitems(config, items):
    """Give browser and API tests the whole-test budget unless they set their own."""
    budget = pytest.mark.timeout(timeouts.to_seconds(timeouts.TEST))
    for item in items:
        if item.get_closest_marker('timeout'):
            continue
        if item.get_closest_marker('ui') or item.get_closest_marker('api'):
            item.add_marker(budget)


def login(page: Page):
    """
    Application login used by the bootstrap step.

    Uses TEST_USERNAME / TEST_PASSWORD when configured; otherwise visits the
    home page so whatever cookies it sets are captured.
    """
    credentials = get_test_credentials()
    if credentials is None:
        logger.info("[auth] TEST_USERNAME/TEST_PASSWORD not set; capturing session from home page")
        page.goto('/')
        return

    login_page = LoginPage(page)
    login_page.navigate_to_login()
    login_page.login(*credentials)


@pytest.fixture(scope="session")
def base_url(pytestconfig):
    """--base-url when given, BASE_URL from the environment otherwise."""
    return pytestconfig.getoption("base_url", default=None) or get_base_url()


@pytest.fixture(scope="session")
def auth_state(browser, base_url) -> Path:
    """Bootstrap step: make sure a usable storage-state file exists."""
    state_path = Path(get_auth_state_path())
    ensure_session_state(browser, state_path, login=login, base_url=base_url)
    return state_path


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, auth_state):
    """Configure browser contexts and seed them with the cached session."""
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
        "storage_state": str(auth_state),
    }


@pytest.fixture
def context(context):
    context.set_default_timeout(timeouts.LONG)
    context.set_default_navigation_timeout(timeouts.NAVIGATION)
    return context


@pytest.fixture(scope="function")
def home_page(page: Page, base_url) -> Page:
    """Page already navigated to the base URL."""
    page.goto(base_url or '/')
    page.wait_for_load_state('domcontentloaded')
    return page


@pytest.fixture(scope="function")
def api_context(playwright):
    """APIRequestContext against API_BASE_URL, disposed after the test."""
    request_context = create_request_context(playwright, get_api_base_url())
    yield request_context
    request_context.dispose()
