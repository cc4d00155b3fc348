from typing import Optional


def truncate(text: str, max_len: int = 64) -> str:
    return text if len(text) <= max_len else text[:max_len - 1] + "…"


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 day', '3 days'"""
    word = singular if count == 1 else (plural or singular + "s")
    return f"{count} {word}"
