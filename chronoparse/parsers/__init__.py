"""Parser contract and numeric disambiguation helpers.

Concrete parsers live with their locale (see chronoparse.locales.en).
"""

from chronoparse.parsers.parserbase import (
    Parser,
    ParserWithWordBoundary,
    matched_alternative,
    parse_week_token,
    parse_year_token,
    parse_count_token,
    assign_week,
    assign_known_week,
    derive_week_dates,
    imply_week_from_date,
)

__all__ = [
    "Parser",
    "ParserWithWordBoundary",
    "matched_alternative",
    "parse_week_token",
    "parse_year_token",
    "parse_count_token",
    "assign_week",
    "assign_known_week",
    "derive_week_dates",
    "imply_week_from_date",
]
