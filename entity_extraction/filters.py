"""
Acceptance checks and deduplication applied after scanning.

The lexical patterns are deliberately loose; these checks drop the
false positives they let through.
"""
from typing import Iterable, List

import regex as re

from .base import Candidate, ValidationResult

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

_NON_DIGIT = re.compile(r'\D', re.ASCII)
_BARE_YEAR = re.compile(r'\d{1,4}', re.ASCII)
_BARE_MONTH_DAY = re.compile(r'\d{1,2}[-/]\d{1,2}', re.ASCII)


def validate_phone(candidate: Candidate) -> ValidationResult:
    """Accept a phone match only if it holds 7 to 15 digits once trimmed"""
    value = candidate.text.strip()
    digit_count = len(_NON_DIGIT.sub('', value))

    if not PHONE_MIN_DIGITS <= digit_count <= PHONE_MAX_DIGITS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone has {digit_count} digits, expected "
                          f"{PHONE_MIN_DIGITS}-{PHONE_MAX_DIGITS}"
        )

    return ValidationResult(is_valid=True, value=value)


def validate_date(candidate: Candidate) -> ValidationResult:
    """Reject bare year and bare month/day fragments"""
    text = candidate.text

    if _BARE_YEAR.fullmatch(text):
        return ValidationResult(is_valid=False, error_message="Bare year fragment")

    if _BARE_MONTH_DAY.fullmatch(text):
        return ValidationResult(is_valid=False, error_message="Month/day without year")

    return ValidationResult(is_valid=True)


def dedupe(values: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping first occurrence order"""
    return list(dict.fromkeys(values))
