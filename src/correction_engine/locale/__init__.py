"""Locale rule sets for the engine.

Turkish is the default locale; its rules drive stop-word filtering and stem
inference whenever no other locale is requested.
"""

from correction_engine.locale.english import ENGLISH
from correction_engine.locale.rules import LocaleRules
from correction_engine.locale.turkish import TURKISH

DEFAULT_LOCALE = TURKISH

_LOCALES = {
    TURKISH.code: TURKISH,
    ENGLISH.code: ENGLISH,
}


def get_locale(code: str | None) -> LocaleRules:
    """Return the rules for a language code.

    Unknown codes get a neutral rule set: sentences are terminated with a
    period and nothing else is rewritten, while learning and domain
    detection keep the default locale's word lists.
    """
    if code is None:
        return DEFAULT_LOCALE
    code = code.lower().split("-")[0].split("_")[0]
    if code in _LOCALES:
        return _LOCALES[code]
    return LocaleRules(
        code=code,
        stopwords=DEFAULT_LOCALE.stopwords,
        suffixes=DEFAULT_LOCALE.suffixes,
        domain_keywords=DEFAULT_LOCALE.domain_keywords,
    )


__all__ = [
    "DEFAULT_LOCALE",
    "ENGLISH",
    "LocaleRules",
    "TURKISH",
    "get_locale",
]
