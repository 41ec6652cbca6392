# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for DroidPlan.

This module provides translation functions and language management.
Supports English and Traditional Chinese with automatic system locale detection.
"""

import locale
import logging

from droidplan.i18n.translations import TRANSLATIONS

logger = logging.getLogger(__name__)

# Supported languages
SUPPORTED_LANGUAGES = ["en", "zh"]

# Current language (default to English)
_current_language = "en"


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'zh' if Chinese is detected, 'en' otherwise.
    """
    try:
        system_locale, _ = locale.getlocale()
    except ValueError:
        return 'en'
    if system_locale and system_locale.lower().startswith('zh'):
        return 'zh'
    return 'en'


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def set_language(lang: str) -> None:
    """
    Set the current UI language.

    Args:
        lang: Language code ('en', 'zh' or 'auto')
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning(f"Unsupported language '{lang}', falling back to English")
        lang = 'en'
    _current_language = lang


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'validation.empty_fields')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS['en'])
    text = translations.get(key) or TRANSLATIONS['en'].get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            logger.warning(f"Could not format translation '{key}' with {kwargs}")

    return text
