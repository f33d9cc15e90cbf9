"""UI-facing copy builders for status messages and notifications."""

from __future__ import annotations

import httpx


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def _response_status(exc: BaseException) -> int | None:
    """HTTP status behind ``exc``, including the one kept on a not-found lookup."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    if isinstance(exc, LookupError):
        status_code = getattr(exc, "status_code", None)
        return status_code if isinstance(status_code, int) else None
    return None


def build_fetch_error(action: str, exc: BaseException) -> str:
    """Build an actionable error for a failed PokéAPI request."""
    status_code = _response_status(exc)
    if status_code == 429:
        return build_actionable_error(
            action,
            why="PokéAPI rate limit reached (HTTP 429)",
            next_step="wait a few seconds and retry",
        )
    if status_code is not None and status_code >= 500:
        return build_actionable_error(
            action,
            why=f"PokéAPI is unavailable right now (HTTP {status_code})",
            next_step="retry in a minute",
        )
    if isinstance(exc, httpx.HTTPStatusError):
        return build_actionable_error(
            action,
            why=f"PokéAPI rejected the request (HTTP {status_code})",
            next_step="check the API URL setting and retry",
        )
    if isinstance(exc, httpx.TimeoutException):
        return build_actionable_error(
            action,
            why="the request timed out",
            next_step="check connectivity and retry",
        )
    if isinstance(exc, LookupError):
        return build_actionable_error(
            action,
            why="an entry on this page is missing from PokéAPI",
            next_step="retry, or narrow the search",
        )
    if isinstance(exc, ValueError):
        return build_actionable_error(
            action,
            why="PokéAPI returned an unexpected response",
            next_step="retry, or check the API URL setting",
        )
    return build_actionable_error(
        action,
        why="a network or I/O error occurred",
        next_step="check connectivity and retry",
    )


def build_not_found_message(name: str, suggestion: str | None = None) -> str:
    """Build the status line for a detail lookup that matched nothing."""
    message = f"Pokémon not found: {name.strip()}"
    if suggestion:
        return f"{message}\nDid you mean {suggestion}?"
    return message


def build_favorite_toggled_message(name: str, is_favorite: bool) -> str:
    """Build notification text after a favorite toggle."""
    if is_favorite:
        return f"Added {name} to favorites"
    return f"Removed {name} from favorites"


__all__ = [
    "build_actionable_error",
    "build_favorite_toggled_message",
    "build_fetch_error",
    "build_next_step_hint",
    "build_not_found_message",
]
