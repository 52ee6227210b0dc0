"""
Smoke Tests - home page
These tests verify the application is up and renders a sane page. Contexts are
seeded from the cached session, so they run authenticated.
"""
import pytest
from playwright.sync_api import Page, expect

pytestmark = [pytest.mark.ui, pytest.mark.smoke]


class TestHomePageSmoke:
    """Basic smoke tests for the home page."""

    def test_home_page_loads(self, home_page: Page):
        """Home page has a title and a visible body."""
        title = home_page.title()
        assert title, "Page title should not be empty"

        expect(home_page.locator('body')).to_be_visible()

    def test_page_returns_valid_http_status(self, page: Page, base_url):
        """Navigating to the base URL returns a non-error status."""
        response = page.goto(base_url)

        assert response is not None, "Navigation produced no response"
        assert response.status < 400, f"Expected status < 400, got {response.status}"

    def test_navigation_elements_are_present(self, home_page: Page):
        """Navigation landmark, when present, is visible."""
        navigation = home_page.get_by_role('navigation')
        if navigation.count() > 0:
            expect(navigation.first).to_be_visible()

    def test_no_console_errors_on_page_load(self, page: Page, base_url):
        """No console errors are logged while the page loads."""
        console_errors = []
        page.on('console', lambda msg: console_errors.append(msg.text) if msg.type == 'error' else None)

        page.goto(base_url)
        page.wait_for_load_state('domcontentloaded')

        assert len(console_errors) == 0, f"Console errors found: {', '.join(console_errors)}"

    def test_page_has_valid_meta_tags(self, home_page: Page):
        """lang and viewport meta, when present, are non-empty."""
        lang = home_page.locator('html').get_attribute('lang')
        if lang is not None:
            assert len(lang) > 0, "html[lang] should not be empty"

        viewport = home_page.locator('meta[name="viewport"]')
        if viewport.count() > 0:
            content = viewport.first.get_attribute('content')
            assert content, "meta[name=viewport] should declare its content"
