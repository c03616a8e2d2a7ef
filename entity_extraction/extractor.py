"""
Entity Extractor

High-level interface tying the registry, scanner and acceptance checks
together. Extraction is total: any string, bytes or None input produces a
well-formed ExtractionResult.
"""
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Union
from pathlib import Path

import regex as re
import yaml

from .base import Candidate, EntityKind, ExtractionResult, KindLike, Pattern, ValidationResult, kind_key
from .filters import dedupe
from .registry import PatternRegistry, RegistryStats, get_default_registry
from .scanner import Scanner
from config import settings
from logger import get_logger

logger = get_logger(__name__)

TextInput = Union[str, bytes, None]


class EntityExtractor:
    """
    Extracts emails, URLs, mentions, hashtags, phones, dates and prices

    Example:
        extractor = EntityExtractor()
        result = extractor.extract("Mail support@example.com about #billing")

        result.emails    # ['support@example.com']
        result.hashtags  # ['#billing']
    """

    def __init__(
        self,
        registry: Optional[PatternRegistry] = None,
        match_timeout: Optional[float] = None,
        patterns_file: Optional[Union[str, Path]] = None
    ):
        """
        Initialize the extractor

        Args:
            registry: Pattern registry (defaults to the shared default registry)
            match_timeout: Timeout for one search in seconds (defaults to settings)
            patterns_file: YAML file with pattern overrides
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.scanner = Scanner(
            match_timeout=match_timeout if match_timeout is not None else settings.match_timeout,
            max_timeouts=settings.max_match_timeouts
        )

        if patterns_file:
            # Overrides must not leak into a registry other extractors share
            if registry is None:
                self.registry = self.registry.copy()
            self.load_patterns_file(patterns_file)

    def load_patterns_file(self, patterns_file: Union[str, Path]):
        """
        Apply pattern overrides from a YAML file

        Expected layout:
            patterns:
              ticket:
                regex: '\\bTICKET-\\d+\\b'
                description: Support ticket id
              phone:
                enabled: false
        """
        config = self._load_config(Path(patterns_file))

        for kind, pattern_cfg in (config.get('patterns') or {}).items():
            pattern_cfg = pattern_cfg or {}

            if not pattern_cfg.get('enabled', True):
                self.registry.unregister(kind)
                logger.info(f"Disabled entity kind: {kind}")
                continue

            if 'regex' not in pattern_cfg:
                logger.warning(f"Pattern config for '{kind}' has no regex, skipping")
                continue

            flags = re.IGNORECASE if pattern_cfg.get('case_insensitive', False) else 0
            self.registry.register(
                kind,
                pattern_cfg['regex'],
                name=pattern_cfg.get('name'),
                flags=flags,
                description=pattern_cfg.get('description')
            )
            logger.info(f"Loaded pattern for entity kind: {kind}")

    def _load_config(self, config_file: Path) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
                logger.info(f"Loaded pattern configuration from {config_file}")
                return config if isinstance(config, dict) else {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_file}: {e}")
            return {}

    def extract(self, text: TextInput, kinds: Optional[Union[KindLike, Iterable[KindLike]]] = None) -> ExtractionResult:
        """
        Extract unique entities per kind, in order of first occurrence

        Args:
            text: Input text
            kinds: Optional subset of kinds to scan for

        Returns:
            ExtractionResult with one list per kind
        """
        text = self._coerce_text(text)
        if not text:
            return ExtractionResult()

        values: Dict[str, List[str]] = {}
        for kind, candidates in self._accepted_candidates(text, kinds).items():
            values[kind] = dedupe(c.text for c in candidates)

        result = ExtractionResult.from_values(values)
        logger.debug(f"Extracted {result.total} entities from {len(text)} chars")
        return result

    def extract_matches(self, text: TextInput, kinds: Optional[Union[KindLike, Iterable[KindLike]]] = None) -> List[Candidate]:
        """
        Every accepted occurrence with its offsets, not deduplicated

        Args:
            text: Input text
            kinds: Optional subset of kinds to scan for

        Returns:
            Candidates ordered by start offset, then by registry order
        """
        text = self._coerce_text(text)
        if not text:
            return []

        order = {kind: i for i, kind in enumerate(self.registry.list_kinds())}
        matches = [
            candidate
            for candidates in self._accepted_candidates(text, kinds).values()
            for candidate in candidates
        ]
        matches.sort(key=lambda c: (c.start, order.get(c.kind, len(order))))
        return matches

    def get_stats(self) -> RegistryStats:
        return self.registry.get_stats()

    def _coerce_text(self, text: TextInput) -> str:
        if text is None:
            return ""
        if isinstance(text, bytes):
            return text.decode('utf-8', errors='replace')
        if not isinstance(text, str):
            raise TypeError(f"Expected str, bytes or None, got {type(text).__name__}")
        return text

    def _select_patterns(self, kinds: Optional[Union[KindLike, Iterable[KindLike]]]) -> List[Pattern]:
        patterns = self.registry.patterns()
        if kinds is None:
            return patterns

        if isinstance(kinds, (str, EntityKind)):
            kinds = [kinds]

        wanted = {kind_key(kind) for kind in kinds}
        unknown = wanted.difference(p.kind for p in patterns)
        if unknown:
            logger.warning(f"Ignoring unknown entity kinds: {sorted(unknown)}")

        return [p for p in patterns if p.kind in wanted]

    def _accepted_candidates(
        self,
        text: str,
        kinds: Optional[Union[KindLike, Iterable[KindLike]]]
    ) -> Dict[str, List[Candidate]]:
        patterns = self._select_patterns(kinds)
        scanned = self.scanner.scan(text, patterns)

        accepted = {}
        for pattern in patterns:
            accepted[pattern.kind] = [
                c for c in (self._apply_validator(pattern, c) for c in scanned[pattern.kind])
                if c is not None
            ]
        return accepted

    def _apply_validator(self, pattern: Pattern, candidate: Candidate) -> Optional[Candidate]:
        """Run the pattern's acceptance check; None means rejected"""
        if pattern.validator is None:
            return candidate

        try:
            validation = pattern.validator(candidate)
        except Exception as e:
            logger.error(f"Validator for '{pattern.name}' failed on {candidate.text!r}: {e}")
            return None

        if isinstance(validation, bool):
            validation = ValidationResult(is_valid=validation)

        if not validation.is_valid:
            logger.debug(f"Rejected {pattern.kind} {candidate.text!r}: {validation.error_message}")
            return None

        value = validation.value
        if value is None or value == candidate.text:
            return candidate

        # Keep offsets pointing at the value when it is a slice of the match
        offset = candidate.text.find(value)
        if offset < 0:
            return replace(candidate, text=value)
        start = candidate.start + offset
        return replace(candidate, text=value, start=start, end=start + len(value))


# Default extractor instance
_default_extractor: Optional[EntityExtractor] = None


def get_default_extractor() -> EntityExtractor:
    """Get the default extractor (singleton), configured from settings"""
    global _default_extractor

    if _default_extractor is None:
        _default_extractor = EntityExtractor(patterns_file=settings.patterns_file)
        logger.info("Created default entity extractor")

    return _default_extractor


def reset_default_extractor():
    """Reset the default extractor (mainly for testing)"""
    global _default_extractor
    _default_extractor = None


def extract_entities(text: TextInput) -> ExtractionResult:
    """
    Extract emails, URLs, mentions, hashtags, phones, dates and prices

    Args:
        text: Input text; empty or None gives an empty result

    Returns:
        ExtractionResult with unique values per kind in first-occurrence order

    Example:
        >>> result = extract_entities("Revenue: $1.5M, Budget: $250k")
        >>> result.prices
        ['$1.5M', '$250k']
    """
    return get_default_extractor().extract(text)
