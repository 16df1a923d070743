"""Utility functions for the Hue launcher.

This module contains helper functions used across the application:
- fuzzy_matches: Launcher-style fuzzy filter for menu items
- split_query: Split a query on the sub-menu separator
- light_names: Map light ids to names for subtitles
- parse_level: Validate a brightness level typed by the user
- similarity_score: Fuzzy string scoring for command suggestions
- find_similar_strings: Find similar strings using fuzzy matching
"""

import re

from models.types import MAX_BRIGHTNESS, Light

# Separates a selected item from its sub-menu in the query text
SEPARATOR = '▸'

LEVEL_PATTERN = re.compile(r'[+-]?[0-9]+')


def fuzzy_matches(text: str, query: str) -> bool:
    """Case-insensitive fuzzy match used to filter menu items.

    Every whitespace-separated word of the query must appear in text as a
    subsequence (its characters in order, not necessarily adjacent). An
    empty query matches everything.
    """
    haystack = text.lower()
    for word in query.lower().split():
        pos = 0
        for char in word:
            pos = haystack.find(char, pos)
            if pos == -1:
                return False
            pos += 1
    return True


def split_query(query: str) -> list[str]:
    """Split a query on SEPARATOR and strip each part.

    "3▸ level▸ 120" becomes ["3", "level", "120"]. A trailing separator
    yields a trailing empty part, marking a completed selection.
    """
    return [part.strip() for part in query.split(SEPARATOR)]


def light_names(lights: dict[str, Light], light_ids: list[str]) -> list[str]:
    """Names for light ids, falling back to the id for unknown lights."""
    return [lights[lid].name if lid in lights else lid for lid in light_ids]


def parse_level(text: str) -> int | None:
    """Parse a brightness level.

    Returns:
        The level if text is an integer in [0, 255], otherwise None
    """
    text = text.strip()
    # ASCII digits only, no underscores
    if not LEVEL_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if 0 <= value <= MAX_BRIGHTNESS:
        return value
    return None


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    # Exact match
    if s1_lower == s2_lower:
        return 100

    # Prefix match
    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    # Contains match
    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 3) -> list[str]:
    """Find candidates similar to target, most similar first."""
    scored = [(candidate, similarity_score(target, candidate)) for candidate in candidates]
    filtered = [(c, s) for c, s in scored if s > 0]
    sorted_matches = sorted(filtered, key=lambda x: x[1], reverse=True)
    return [c for c, s in sorted_matches[:limit]]
