"""
BasePage - foundation for page objects.

Each page (or significant component) gets its own class that owns its
selectors and exposes user-level actions, so tests read like
``login_page.login(user, password)`` and a changed selector is fixed in one
place. Prefer role, label and test-id locators over CSS.
"""

from pathlib import Path

from playwright.sync_api import Locator, Page

from utils import timeouts


class BasePage:
    """Common navigation and lookup helpers shared by all page objects."""

    def __init__(self, page: Page):
        self.page = page

    def goto(self, path: str):
        """Navigate to ``path`` (relative to the context base URL) and wait for the DOM."""
        self.page.goto(path, timeout=timeouts.NAVIGATION)
        self.wait_for_page_load()

    def get_title(self) -> str:
        return self.page.title()

    def wait_for_page_load(self):
        self.page.wait_for_load_state('domcontentloaded')

    def get_by_test_id(self, test_id: str) -> Locator:
        return self.page.get_by_test_id(test_id)

    def get_by_role(self, role: str, **kwargs) -> Locator:
        return self.page.get_by_role(role, **kwargs)

    @property
    def current_url(self) -> str:
        return self.page.url

    def take_screenshot(self, name: str, output_dir: str = 'test-results') -> Path:
        path = Path(output_dir) / f"{name}.png"
        self.page.screenshot(path=str(path))
        return path
