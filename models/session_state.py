"""
SessionState Model - persisted browser session (cookies + origin storage)

Mirrors the JSON document Playwright writes with ``context.storage_state()``
and reads back through ``browser.new_context(storage_state=...)``:

    {
      "cookies": [
        {"name": "...", "value": "...", "domain": "...", "path": "/",
         "expires": 1767225600, "httpOnly": true, "secure": true, "sameSite": "Lax"}
      ],
      "origins": [
        {"origin": "https://app.example.com", "localStorage": [{"name": "...", "value": "..."}]}
      ]
    }

``expires`` is Unix epoch seconds; ``-1`` (or a missing key) marks a session
cookie with no fixed expiry. Origins are carried verbatim and never inspected.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from utils.errors import SessionStateFormatError

SESSION_COOKIE_EXPIRES = -1

# Cookie keys owned by the model; anything else round-trips through ``extra``.
_COOKIE_FIELDS = ('name', 'value', 'domain', 'path', 'expires')


@dataclass
class Cookie:
    """A single cookie as stored in a Playwright storage-state file."""
    name: str
    value: str
    domain: str = ''
    path: str = '/'
    expires: float = SESSION_COOKIE_EXPIRES
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_fixed_expiry(self) -> bool:
        return self.expires > 0

    def is_expired(self, now: float) -> bool:
        """
        Whether this cookie is no longer usable at ``now`` (epoch seconds).

        A cookie expiring exactly at ``now`` counts as expired. Session cookies
        never expire.
        """
        return self.has_fixed_expiry and self.expires <= now

    @classmethod
    def from_dict(cls, data: Any) -> 'Cookie':
        if not isinstance(data, dict):
            raise SessionStateFormatError(
                f"Cookie entry must be an object, got {type(data).__name__}"
            )

        expires = data.get('expires', SESSION_COOKIE_EXPIRES)
        if expires is None:
            expires = SESSION_COOKIE_EXPIRES
        # bool is an int subclass, but never a valid timestamp
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            raise SessionStateFormatError(
                f"Cookie '{data.get('name')}' has non-numeric expires: {expires!r}",
                context={'cookie': data.get('name')},
            )

        return cls(
            name=str(data.get('name', '')),
            value=str(data.get('value', '')),
            domain=str(data.get('domain', '')),
            path=str(data.get('path', '/')),
            expires=expires,
            extra={k: v for k, v in data.items() if k not in _COOKIE_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'value': self.value,
            'domain': self.domain,
            'path': self.path,
            'expires': self.expires,
        }
        data.update(self.extra)
        return data


@dataclass
class SessionState:
    """Cookies plus opaque per-origin storage captured from a browser context."""
    cookies: List[Cookie] = field(default_factory=list)
    origins: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.cookies) == 0

    def expired_cookies(self, now: float) -> List[Cookie]:
        return [cookie for cookie in self.cookies if cookie.is_expired(now)]

    def is_valid_at(self, now: float) -> bool:
        """True when the state has cookies and none of them has expired at ``now``."""
        if self.is_empty:
            return False
        return not any(cookie.is_expired(now) for cookie in self.cookies)

    @classmethod
    def from_dict(cls, data: Any) -> 'SessionState':
        if not isinstance(data, dict):
            raise SessionStateFormatError(
                f"Session state must be a JSON object, got {type(data).__name__}"
            )

        raw_cookies = data.get('cookies') or []
        raw_origins = data.get('origins') or []

        if not isinstance(raw_cookies, list):
            raise SessionStateFormatError("'cookies' must be a list")
        if not isinstance(raw_origins, list):
            raise SessionStateFormatError("'origins' must be a list")

        return cls(
            cookies=[Cookie.from_dict(item) for item in raw_cookies],
            origins=list(raw_origins),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cookies': [cookie.to_dict() for cookie in self.cookies],
            'origins': self.origins,
        }

    @classmethod
    def loads(cls, text: str) -> 'SessionState':
        try:
            data = json.loads(text)
        except ValueError as e:
            raise SessionStateFormatError(f"Session state is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'SessionState':
        """
        Read a session state from disk.

        Raises:
            OSError: the file cannot be read
            SessionStateFormatError: the content is not a storage-state document
        """
        return cls.loads(Path(path).read_text(encoding='utf-8'))

    def dumps(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
