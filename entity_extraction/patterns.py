"""
Built-in patterns for the fixed entity kinds.

Digit, word and boundary classes are ASCII-only. The URL pattern is the
exception: it uses no such classes and stops at any Unicode whitespace.
"""
from typing import List

import regex as re

from .base import EntityKind, Pattern
from .filters import validate_date, validate_phone

EMAIL_REGEX = r'\b[a-zA-Z0-9._%+-]++@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'

# Trailing sentence punctuation is left out of the URL
URL_REGEX = r'https?://[^\s<>"{}|\\^\[\]`]+(?<![.,;:!?])'

# An @ right after a word character (an email address) is not a mention
MENTION_REGEX = r'(?<!\w)@[a-zA-Z0-9_]+\b'

HASHTAG_REGEX = r'#[a-zA-Z0-9_]+\b'

PHONE_REGEX = (
    r'(?:\+?[1-9]\d{0,3})?[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}\b'
)

DATE_REGEX = (
    r'\b(?:'
    r'\d{1,2}[-/]\d{1,2}[-/]\d{2,4}'
    r'|\d{4}[-/]\d{1,2}[-/]\d{1,2}'
    r'|(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]* \d{1,2},? \d{4}'
    r')\b'
)

PRICE_REGEX = (
    r'[$€£¥₹]\s?\d{1,3}(?:[,.\s]\d{3})*(?:[.,]\d{1,2})?[kKmMbB]?(?!\w)'
)


def create_default_patterns() -> List[Pattern]:
    """Create the pattern definitions for every EntityKind, in result order"""
    return [
        Pattern(
            kind=EntityKind.EMAIL,
            name="email",
            regex=EMAIL_REGEX,
            flags=re.ASCII,
            description="local-part@domain.tld",
            examples=["support@example.com"]
        ),
        Pattern(
            kind=EntityKind.URL,
            name="url",
            regex=URL_REGEX,
            description="http(s) URL up to whitespace or a delimiter",
            examples=["https://example.com/search?q=test"]
        ),
        Pattern(
            kind=EntityKind.MENTION,
            name="mention",
            regex=MENTION_REGEX,
            flags=re.ASCII,
            description="@username",
            examples=["@john_doe"]
        ),
        Pattern(
            kind=EntityKind.HASHTAG,
            name="hashtag",
            regex=HASHTAG_REGEX,
            flags=re.ASCII,
            description="#topic",
            examples=["#100DaysOfCode"]
        ),
        Pattern(
            kind=EntityKind.PHONE,
            name="phone",
            regex=PHONE_REGEX,
            flags=re.ASCII,
            description="Grouped digit runs with optional country and area code",
            validator=validate_phone,
            examples=["(555) 123-4567", "+1-800-555-0100", "555.123.4567"]
        ),
        Pattern(
            kind=EntityKind.DATE,
            name="date",
            regex=DATE_REGEX,
            flags=re.ASCII | re.IGNORECASE,
            description="Numeric or month-name dates",
            validator=validate_date,
            examples=["2024-01-15", "12/31/2024", "January 5, 2024"]
        ),
        Pattern(
            kind=EntityKind.PRICE,
            name="price",
            regex=PRICE_REGEX,
            flags=re.ASCII,
            description="Currency amount with optional k/M/B suffix",
            examples=["$1,234.56", "€50", "$1.5M"]
        ),
    ]
