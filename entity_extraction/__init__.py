"""
Entity Extraction Module

Scans free text for structured entities:
- Email addresses
- URLs
- @mentions and #hashtags
- Phone numbers
- Dates
- Prices

Each kind is matched independently over the original text, filtered for
false positives and deduplicated in first-occurrence order.

Quick Start:
    from entity_extraction import extract_entities

    result = extract_entities("Call (555) 123-4567 or mail help@example.com")
    result.phones  # ['(555) 123-4567']
    result.emails  # ['help@example.com']

    # Custom kinds
    from entity_extraction import EntityExtractor, PatternRegistry

    registry = PatternRegistry()
    registry.register("ticket", r"\\bTICKET-\\d+\\b")
    extractor = EntityExtractor(registry=registry)
    extractor.extract(text).extra["ticket"]
"""

# Base classes and enums
from .base import (
    EntityKind,
    Candidate,
    Pattern,
    ValidationResult,
    ExtractionResult,
)

# Acceptance checks
from .filters import validate_phone, validate_date, dedupe

# Registry and scanner
from .registry import (
    PatternRegistry,
    RegistryStats,
    get_default_registry,
    reset_default_registry,
)
from .scanner import Scanner

# High-level interface
from .extractor import (
    EntityExtractor,
    extract_entities,
    get_default_extractor,
    reset_default_extractor,
)

__all__ = [
    # Base classes
    "EntityKind",
    "Candidate",
    "Pattern",
    "ValidationResult",
    "ExtractionResult",

    # Acceptance checks
    "validate_phone",
    "validate_date",
    "dedupe",

    # Registry and scanner
    "PatternRegistry",
    "RegistryStats",
    "get_default_registry",
    "reset_default_registry",
    "Scanner",

    # High-level interface
    "EntityExtractor",
    "extract_entities",
    "get_default_extractor",
    "reset_default_extractor",
]
