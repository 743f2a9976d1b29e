"""Conversation history shaping: role vocabulary mapping and sliding token window."""

from collections.abc import Callable

from brainybot.db.models import ROLE_ASSISTANT, ROLE_USER
from brainybot.llm.token_counter import count_tokens

# Default token budget (conservative for smaller models)
DEFAULT_MAX_TOKENS = 6000

# Per-message overhead added to every content count
MESSAGE_OVERHEAD = 4

# internal role -> Gemini role
_TO_GEMINI = {ROLE_USER: "user", ROLE_ASSISTANT: "model"}
_FROM_GEMINI = {external: internal for internal, external in _TO_GEMINI.items()}


def to_gemini_role(role: str) -> str:
    try:
        return _TO_GEMINI[role]
    except KeyError:
        raise ValueError(f"Unknown conversation role: {role}") from None


def from_gemini_role(role: str) -> str:
    try:
        return _FROM_GEMINI[role]
    except KeyError:
        raise ValueError(f"Unknown Gemini role: {role}") from None


def to_gemini_history(history: list[dict]) -> list[dict]:
    """Convert [{"role", "content"}] turns to Gemini's [{"role", "parts"}] contents."""
    return [{"role": to_gemini_role(turn["role"]), "parts": [turn["content"]]} for turn in history]


def build_context(
    conversation_messages: list[dict],
    max_tokens: int = DEFAULT_MAX_TOKENS,
    count: Callable[[str], int] | None = None,
) -> list[dict]:
    """Return the history turns that fit within the token budget, oldest first.

    Strategy: always try to keep the first message (it usually states the
    problem) plus as many recent messages as fit within the remaining budget.
    """
    if not conversation_messages:
        return []

    count = count or count_tokens

    first_msg = {"role": conversation_messages[0]["role"], "content": conversation_messages[0]["content"]}
    first_tokens = count(first_msg["content"]) + MESSAGE_OVERHEAD

    # Build from the end (most recent messages first)
    recent: list[dict] = []
    used = 0

    for msg in reversed(conversation_messages[1:]):
        entry = {"role": msg["role"], "content": msg["content"]}
        msg_tokens = count(entry["content"]) + MESSAGE_OVERHEAD
        if used + msg_tokens + first_tokens > max_tokens:
            break
        recent.insert(0, entry)
        used += msg_tokens

    # If first message still fits, include it
    if first_tokens <= max_tokens - used:
        return [first_msg] + recent
    return recent
