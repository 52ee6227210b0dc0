"""
LoginPage - page object for the sign-in form.

Adjust the locators to the application under test; the bootstrap login in
``tests/conftest.py`` drives this page.
"""

from typing import Optional

from playwright.sync_api import Error as PlaywrightError, Locator

from pages.base_page import BasePage
from utils import timeouts


class LoginPage(BasePage):
    """Sign-in form: username, password, submit button and error alert."""

    LOGIN_PATH = '/login'

    @property
    def username_input(self) -> Locator:
        return self.page.get_by_role('textbox', name='Username')

    @property
    def password_input(self) -> Locator:
        return self.page.get_by_label('Password')

    @property
    def submit_button(self) -> Locator:
        return self.page.get_by_role('button', name='Sign in')

    @property
    def error_message(self) -> Locator:
        return self.page.get_by_role('alert')

    @property
    def login_form(self) -> Locator:
        return self.get_by_test_id('login-form')

    def navigate_to_login(self):
        self.goto(self.LOGIN_PATH)

    def fill_username(self, username: str):
        self.username_input.fill(username)

    def fill_password(self, password: str):
        self.password_input.fill(password)

    def click_submit(self):
        self.submit_button.click()

    def login(self, username: str, password: str):
        """Fill and submit the form, then wait for the resulting page."""
        self.fill_username(username)
        self.fill_password(password)
        self.click_submit()
        self.page.wait_for_load_state('domcontentloaded')

    def get_error_message(self) -> Optional[str]:
        """Text of the error alert, or None when no alert appears within the short timeout."""
        try:
            self.error_message.wait_for(state='visible', timeout=timeouts.SHORT)
        except PlaywrightError:
            # TimeoutError subclasses Error
            return None
        return self.error_message.text_content()

    def is_login_form_visible(self) -> bool:
        try:
            return self.username_input.is_visible()
        except PlaywrightError:
            return False
