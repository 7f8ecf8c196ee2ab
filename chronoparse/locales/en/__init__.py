"""English locale: parsers, vocabulary and the casual/strict configurations."""

from chronoparse.locales.en.enisoweekparser import ENISOWeekNumberParser
from chronoparse.locales.en.enrelativeweekparser import ENRelativeWeekParser
from chronoparse.locales.en.encasualdateparser import ENCasualDateParser
from chronoparse.locales.en.enweekdayparser import ENWeekdayParser
from chronoparse.locales.en.enmonthdateparser import ENMonthDateParser
from chronoparse.locales.en.enslashdateparser import ENSlashDateFormatParser
from chronoparse.locales.en.entimeparser import ENTimeExpressionParser
from chronoparse.locales.en.entimeunitparser import (
    ENTimeUnitAgoFormatParser,
    ENTimeUnitLaterFormatParser,
)
from chronoparse.locales.en.enconfiguration import (
    build_configuration,
    casual,
    strict,
    load_en_config,
)

__all__ = [
    "ENISOWeekNumberParser",
    "ENRelativeWeekParser",
    "ENCasualDateParser",
    "ENWeekdayParser",
    "ENMonthDateParser",
    "ENSlashDateFormatParser",
    "ENTimeExpressionParser",
    "ENTimeUnitAgoFormatParser",
    "ENTimeUnitLaterFormatParser",
    "build_configuration",
    "casual",
    "strict",
    "load_en_config",
]
