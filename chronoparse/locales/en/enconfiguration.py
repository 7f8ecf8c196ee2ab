"""English Configurations
----------------------

Builds the "casual" and "strict" Chrono configurations from enconfig.yaml.
The YAML file names the parsers and refiners of each configuration; the
factories below turn those names into instances wired with the shared
vocabulary.

Each configuration is built once, on first use, and shared afterwards.
"""

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict
import logging

from chronoparse.chrono import Chrono
from chronoparse.locales.en.encasualdateparser import ENCasualDateParser
from chronoparse.locales.en.enisoweekparser import ENISOWeekNumberParser
from chronoparse.locales.en.enmonthdateparser import ENMonthDateParser
from chronoparse.locales.en.enrelativeweekparser import ENRelativeWeekParser
from chronoparse.locales.en.enslashdateparser import ENSlashDateFormatParser
from chronoparse.locales.en.entimeparser import ENTimeExpressionParser
from chronoparse.locales.en.entimeunitparser import (
    ENTimeUnitAgoFormatParser,
    ENTimeUnitLaterFormatParser,
)
from chronoparse.locales.en.enweekdayparser import ENWeekdayParser
from chronoparse.parsers.parserbase import Parser
from chronoparse.refiners import (
    ExtractYearSuffixRefiner,
    ForwardDateRefiner,
    MergeDateRangeRefiner,
    MergeDateTimeRefiner,
    PrioritizeSpecificRefiner,
    PrioritizeTagRefiner,
    Refiner,
    UnlikelyFormatFilter,
)
from chronoparse.shared_utils import load_yaml_file

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "enconfig.yaml"


@lru_cache(maxsize=1)
def load_en_config() -> dict:
    """Load enconfig.yaml (cached)."""
    config = load_yaml_file(CONFIG_PATH)
    logger.debug(f"Loaded English vocabulary version {config.get('version')}")
    return config


# ---- Factories: YAML name -> instance ----

PARSER_FACTORIES: Dict[str, Callable[[dict], Parser]] = {
    "iso_week": lambda config: ENISOWeekNumberParser(),
    "relative_week": lambda config: ENRelativeWeekParser(
        config["relative_week_modifiers"],
        config["relative_week_phrases"],
        config["number_words"],
    ),
    "casual_date": lambda config: ENCasualDateParser(config["casual_days"]),
    "weekday": lambda config: ENWeekdayParser(config["weekdays"], config["relative_week_modifiers"]),
    "month_date": lambda config: ENMonthDateParser(config["months"]),
    "slash_date": lambda config: ENSlashDateFormatParser(),
    "time_expression": lambda config: ENTimeExpressionParser(),
    "time_unit_ago": lambda config: ENTimeUnitAgoFormatParser(config["time_units"], config["number_words"]),
    "time_unit_later": lambda config: ENTimeUnitLaterFormatParser(config["time_units"], config["number_words"]),
}

REFINER_FACTORIES: Dict[str, Callable[[dict, bool], Refiner]] = {
    "merge_date_time": lambda config, strict: MergeDateTimeRefiner(config["date_time_connectors"]),
    "merge_date_range": lambda config, strict: MergeDateRangeRefiner(
        config["range_connectors"],
        config.get("range_prefixes", ()),
        config.get("paired_range_connectors"),
    ),
    "extract_year_suffix": lambda config, strict: ExtractYearSuffixRefiner(),
    "unlikely_format_filter": lambda config, strict: UnlikelyFormatFilter(strict),
    "prioritize_tags": lambda config, strict: PrioritizeTagRefiner(config["priority_tags"]),
    "prioritize_specific": lambda config, strict: PrioritizeSpecificRefiner(),
    "forward_date": lambda config, strict: ForwardDateRefiner(),
}


@lru_cache(maxsize=None)
def build_configuration(name: str) -> Chrono:
    """
    Build the named configuration from enconfig.yaml.

    Args:
        name: Configuration name ("casual" or "strict")

    Returns:
        Chrono instance (cached per name)

    Raises:
        ValueError: If the configuration, or one of its parsers or refiners,
            is unknown

    Examples:
        >>> chrono = build_configuration("casual")
        >>> chrono.parse_date("Week 15 of 2023")
        datetime.datetime(2023, 4, 10, 12, 0, tzinfo=tzutc())
    """
    config = load_en_config()
    configurations = config.get("configurations", {})
    if name not in configurations:
        raise ValueError(f"Unknown configuration {name!r}. Available: {sorted(configurations)}")

    entry = configurations[name]
    strict = bool(entry.get("strict", False))

    parsers = []
    for parser_name in entry.get("parsers", []):
        if parser_name not in PARSER_FACTORIES:
            raise ValueError(f"Unknown parser {parser_name!r} in configuration {name!r}")
        parsers.append(PARSER_FACTORIES[parser_name](config))

    refiners = []
    for refiner_name in entry.get("refiners", []):
        if refiner_name not in REFINER_FACTORIES:
            raise ValueError(f"Unknown refiner {refiner_name!r} in configuration {name!r}")
        refiners.append(REFINER_FACTORIES[refiner_name](config, strict))

    logger.info(f"Built '{name}' configuration: {len(parsers)} parsers, {len(refiners)} refiners")
    return Chrono(parsers, refiners, config.get("timezone_abbreviations", {}), name=name)


def casual() -> Chrono:
    """Lenient configuration: all English parsers."""
    return build_configuration("casual")


def strict() -> Chrono:
    """Formal configuration: explicit weeks, dates and times only."""
    return build_configuration("strict")


__all__ = [
    "CONFIG_PATH",
    "load_en_config",
    "build_configuration",
    "casual",
    "strict",
    "PARSER_FACTORIES",
    "REFINER_FACTORIES",
]
