"""
Shared Utility Functions
------------------------

Common helpers used across parsers, refiners and locale configurations.

Functions:
  - normalize_connector_text: Canonical form of the text between two matches
  - alternation: Regex alternation from a vocabulary, longest words first
  - phrase_alternation / phrase_key: Same for multi-word phrases
  - load_yaml_file: Load and parse YAML file
"""

import re
import unicodedata
from pathlib import Path
from typing import Iterable

try:
    import yaml
except ImportError as e:
    raise ImportError("PyYAML not installed. pip install pyyaml") from e


def normalize_connector_text(text: str) -> str:
    """
    Normalize the text found between two candidates.

    Transformations:
      - Strip whitespace
      - Lowercase
      - Normalize Unicode (NFC)
      - Normalize dashes (—, –, −, ‒ → -)
      - Collapse whitespace

    Args:
        text: Raw connector text (e.g., " – ", "  at ")

    Returns:
        Normalized connector

    Examples:
        >>> normalize_connector_text(" – ")
        '-'

        >>> normalize_connector_text("  At ")
        'at'

        >>> normalize_connector_text("")
        ''
    """
    if not text:
        return ""

    text = text.strip().lower()
    text = unicodedata.normalize("NFC", text)

    # em dash, en dash, minus sign, figure dash
    for dash in ("—", "–", "−", "‒"):
        text = text.replace(dash, "-")

    text = re.sub(r"\s+", " ", text)
    return text.strip()


def alternation(words: Iterable[str]) -> str:
    """
    Build a non-capturing regex alternation from vocabulary words.

    Longer words come first so "september" wins over "sep".

    Examples:
        >>> alternation(["sep", "september"])
        '(?:september|sep)'
    """
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    return "(?:" + "|".join(re.escape(w) for w in ordered) + ")"


def phrase_key(text: str) -> str:
    """Lowercased phrase with single spaces, used as a vocabulary key."""
    return " ".join(text.lower().split())


def phrase_alternation(phrases: Iterable[str]) -> str:
    """
    Like alternation, but words inside a phrase may be separated by any
    run of whitespace.

    Examples:
        >>> phrase_alternation(["week after next"])
        '(?:week\\s+after\\s+next)'
    """
    ordered = sorted(set(phrase_key(p) for p in phrases), key=lambda p: (-len(p), p))
    return "(?:" + "|".join(r"\s+".join(re.escape(w) for w in p.split()) for p in ordered) + ")"


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dictionary

    Raises:
        FileNotFoundError: If file does not exist

    Examples:
        >>> data = load_yaml_file(Path("enconfig.yaml"))
        >>> data['priority_tags']
        ['ENISOWeekParser', 'ENRelativeWeekParser']
    """
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


__all__ = [
    "normalize_connector_text",
    "alternation",
    "phrase_key",
    "phrase_alternation",
    "load_yaml_file",
]
