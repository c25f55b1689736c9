"""Network-free replies used when no completion provider is configured."""

import re

from .commands import CommandRouter
from .context import ContextSummary

TIPS_REPLY = (
    "Energy Tips: Shift heavy appliance use to off-peak hours, set AC to 24°C, "
    "and fix leaks to reduce water loss."
)
GREETING_REPLY = "Hello! Ask me about /usage, /devices, /billing or type /help for commands."
CAPABILITIES_REPLY = (
    "I can help with usage analytics (/usage), devices (/devices), and billing (/billing). "
    "Type /help for all commands."
)

# Matched as word prefixes: "tips", "saving" and "conservation" all count
CONSERVATION_KEYWORDS = ("tip", "save", "saving", "conserv")
# Matched as whole words only
GREETING_KEYWORDS = frozenset({"hello", "hi", "hey"})

_WORD = re.compile(r"[a-z']+")

_router = CommandRouter()


def heuristic_reply(user_input: str, context: ContextSummary) -> str:
    """Pick a canned reply by keyword priority.

    Order: command prefix, conservation phrasing, greeting, capabilities.
    Pure and deterministic for a given input and context.
    """
    command = _router.match(user_input)
    if command is not None:
        return _router.reply_for(command, context)

    words = _WORD.findall(user_input.lower())
    if any(word.startswith(CONSERVATION_KEYWORDS) for word in words):
        return TIPS_REPLY
    if GREETING_KEYWORDS.intersection(words):
        return GREETING_REPLY
    return CAPABILITIES_REPLY
