"""
Timeout constants in milliseconds, shared by fixtures and page objects.
"""

SHORT = 5_000      # optional elements such as error alerts
MEDIUM = 10_000    # expect() assertions
LONG = 15_000      # click(), fill() and other actions
NAVIGATION = 30_000
TEST = 60_000      # whole browser/API test, enforced through pytest-timeout


def to_seconds(milliseconds: int) -> float:
    return milliseconds / 1000
