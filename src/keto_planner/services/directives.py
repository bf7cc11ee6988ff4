"""Parsing and replies for the ``netcarbs`` chat directive."""

import math

DIRECTIVE_KEYWORD = "netcarbs"
_DIRECTIVE_TOKENS = 4


def parse_net_carbs_directive(text: str) -> tuple[float, float, float] | None:
    """Parse ``netcarbs <total> <fiber> <polyols>``.

    The keyword is case-insensitive and tokens are separated by spaces.
    Anything else, including non-finite numbers, is not a directive.
    """
    parts = [part for part in text.split(" ") if part]
    if len(parts) != _DIRECTIVE_TOKENS or parts[0].lower() != DIRECTIVE_KEYWORD:
        return None
    values = []
    for token in parts[1:]:
        if "_" in token:
            return None
        try:
            value = float(token)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
    total, fiber, polyols = values
    return total, fiber, polyols


def format_net_carbs_reply(
    total: float, fiber: float, polyols: float, net: float
) -> str:
    """Echo the directive inputs with the computed net carbs."""
    return (
        f"Using your inputs: total={total}g, fiber={fiber}g, "
        f"polyols={polyols}g → net={net:.1f}g."
    )


def snack_prompt(net: float) -> str:
    """Assistant prompt asking for a snack matching a net carb amount."""
    return f"Given net carbs {net}g, suggest a matching keto snack."
