"""
SessionCache Service - cached browser session gate

Decides whether a previously captured Playwright storage state can be reused,
so the bootstrap step only runs the interactive login when it has to:

    check = ensure_session_state(browser, ".auth/state.json", login=do_login)

A missing, corrupt, empty or expired state file is a cache-miss, never an
error. Writing a freshly captured state is the one failure that propagates:
dependent tests have nothing to load without it.
"""

import contextlib
import logging
import os
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from models.session_state import SessionState
from utils.errors import SessionCaptureError, SessionStateFormatError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SessionStatus(str, Enum):
    """Outcome of inspecting a persisted session state."""
    ABSENT = "absent"
    CORRUPT = "corrupt"
    EMPTY = "empty"
    EXPIRED = "expired"
    VALID = "valid"


@dataclass
class SessionCheck:
    """Tagged result of a cache check, kept around for logging."""
    status: SessionStatus
    path: Path
    checked_at: float
    reason: str = ""

    @property
    def is_valid(self) -> bool:
        return self.status is SessionStatus.VALID

    def __bool__(self) -> bool:
        return self.is_valid


def check_session_state(state_path: PathLike, now: Optional[float] = None) -> SessionCheck:
    """
    Inspect the session state at ``state_path`` without modifying it.

    Args:
        state_path: Location of the storage-state JSON file
        now: Check instant in epoch seconds (defaults to the current time,
            read once for the whole check)

    Returns:
        SessionCheck with the status and a short reason
    """
    path = Path(state_path)
    if now is None:
        now = time.time()

    try:
        exists = path.is_file()
    except OSError as e:
        logger.warning(f"Cannot stat session file {path}: {e}")
        return SessionCheck(SessionStatus.ABSENT, path, now, str(e))

    if not exists:
        return SessionCheck(SessionStatus.ABSENT, path, now, f"no session file at {path}")

    try:
        state = SessionState.load(path)
    except (OSError, ValueError, RecursionError, SessionStateFormatError) as e:
        # UnicodeDecodeError is a ValueError; RecursionError comes from deeply nested JSON
        logger.warning(f"Ignoring unreadable session file {path}: {e}")
        return SessionCheck(SessionStatus.CORRUPT, path, now, str(e))

    if state.is_empty:
        return SessionCheck(SessionStatus.EMPTY, path, now, "session file has no cookies")

    expired = state.expired_cookies(now)
    if expired:
        names = ", ".join(cookie.name for cookie in expired)
        return SessionCheck(
            SessionStatus.EXPIRED, path, now,
            f"{len(expired)} of {len(state.cookies)} cookies expired: {names}"
        )

    return SessionCheck(
        SessionStatus.VALID, path, now, f"{len(state.cookies)} cookies still valid"
    )


def is_session_valid(state_path: PathLike, now: Optional[float] = None) -> bool:
    """True when the cached session at ``state_path`` can be reused. Never raises."""
    return check_session_state(state_path, now=now).is_valid


def capture_session_state(context, state_path: PathLike) -> Path:
    """
    Persist the cookies and origin storage of a live browser context.

    The state is written to a temporary file next to the destination and
    renamed over it, so readers see either the previous file or the new one.

    Args:
        context: Playwright ``BrowserContext`` (anything with ``storage_state()``)
        state_path: Destination file; parent directories are created

    Returns:
        The path written

    Raises:
        SessionCaptureError: the state could not be written
    """
    path = Path(state_path)
    state = SessionState.from_dict(context.storage_state())

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix='.tmp',
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(state.dumps())
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise SessionCaptureError(
            f"Could not write session state to {path}: {e}",
            context={'path': str(path)},
        ) from e

    logger.debug(f"Captured session state ({len(state.cookies)} cookies) to {path}")
    return path


def ensure_session_state(
    browser,
    state_path: PathLike,
    login: Callable,
    base_url: Optional[str] = None,
) -> SessionCheck:
    """
    Bootstrap step: reuse the cached session or log in and capture a new one.

    Args:
        browser: Playwright ``Browser`` used to open a throwaway login context
        state_path: Storage-state file shared with dependent browser contexts
        login: Callable receiving a ``Page``; performs the application login
        base_url: Origin for relative navigation inside ``login``

    Returns:
        The SessionCheck taken before any login happened
    """
    check = check_session_state(state_path)

    if check.is_valid:
        logger.info(f"[auth] Reusing cached session from {check.path} ({check.reason})")
        return check

    logger.info(f"[auth] No valid cached session ({check.status.value}: {check.reason}); authenticating...")

    context_args = {'base_url': base_url} if base_url else {}
    context = browser.new_context(**context_args)
    try:
        page = context.new_page()
        login(page)
        capture_session_state(context, state_path)
    finally:
        context.close()

    logger.info(f"[auth] Session captured to {check.path}")
    return check
