"""Search and sort over the gift collection."""

from collections.abc import Iterable

from .models import Gift


def query(gifts: Iterable[Gift], search_term: str = "", ascending: bool = True) -> list[Gift]:
    """Filter gifts by name and sort them by name.

    Args:
        gifts: Gifts in stored order
        search_term: Case-insensitive substring to match against names;
                     empty keeps every gift
        ascending: Sort direction

    Returns:
        New list; gifts with equal names keep their input order
    """
    term = search_term.lower()
    matched = [g for g in gifts if not term or term in g.name.lower()]
    return sorted(matched, key=lambda g: g.name, reverse=not ascending)
