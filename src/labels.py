# src/labels.py
from __future__ import annotations

from errors import InvalidInput


def wrap_label(label: str, max_width: int) -> list[str]:
    """
    Greedy word-wrap for compact chart labels.

    Words are never split: a word longer than max_width sits alone on its line.
    A label that already fits comes back unchanged as a one-element list.
    """
    if isinstance(max_width, bool) or not isinstance(max_width, int) or max_width < 1:
        raise InvalidInput(f"max_width must be an integer >= 1, got {max_width!r}")

    if len(label) <= max_width:
        return [label]

    lines: list[str] = []
    current = ""
    for word in label.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= max_width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word

    if current or not lines:
        lines.append(current)
    return lines
