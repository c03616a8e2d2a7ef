"""
Pattern Registry

Holds one compiled pattern per entity kind. The registry is shared between
callers, so updates swap in a new mapping instead of mutating the one a
concurrent scan may be iterating.
"""
from typing import Dict, List, Optional, Set
from dataclasses import dataclass

from .base import KindLike, Pattern, Validator, kind_key
from .patterns import create_default_patterns
from logger import get_logger

logger = get_logger(__name__)


@dataclass
class RegistryStats:
    """Statistics about registered patterns"""
    total_patterns: int
    kinds: List[str]
    validated_kinds: Set[str]


class PatternRegistry:
    """
    Ordered registry of entity patterns, one per kind

    Example:
        registry = PatternRegistry()
        registry.register("ticket", r"\\bTICKET-\\d+\\b")

        pattern = registry.get_pattern("ticket")
    """

    def __init__(self, patterns: Optional[List[Pattern]] = None):
        self._patterns: Dict[str, Pattern] = {}

        for pattern in (create_default_patterns() if patterns is None else patterns):
            self.register_pattern(pattern)

    def register_pattern(self, pattern: Pattern):
        """
        Register a compiled pattern under its kind

        Replaces any pattern already registered for that kind.
        """
        if pattern.kind in self._patterns:
            logger.warning(f"Overwriting existing pattern for kind: {pattern.kind}")

        updated = dict(self._patterns)
        updated[pattern.kind] = pattern
        self._patterns = updated

        logger.debug(f"Registered pattern '{pattern.name}' for kind: {pattern.kind}")

    def register(
        self,
        kind: KindLike,
        regex: str,
        name: Optional[str] = None,
        validator: Optional[Validator] = None,
        flags: int = 0,
        description: Optional[str] = None
    ) -> Pattern:
        """
        Compile and register a pattern

        Args:
            kind: EntityKind or custom kind name
            regex: Regular expression for the kind
            name: Pattern name (defaults to the kind)
            validator: Optional acceptance check applied to each match
            flags: Regex flags
            description: Human-readable description

        Returns:
            The registered pattern

        Raises:
            ValueError: If the regex does not compile or the kind is empty
        """
        key = kind_key(kind)
        pattern = Pattern(
            kind=key,
            name=name or key,
            regex=regex,
            flags=flags,
            description=description,
            validator=validator
        )
        self.register_pattern(pattern)
        return pattern

    def unregister(self, kind: KindLike):
        """Remove the pattern for a kind"""
        key = kind_key(kind)
        if key in self._patterns:
            updated = dict(self._patterns)
            del updated[key]
            self._patterns = updated
            logger.info(f"Unregistered pattern for kind: {key}")
        else:
            logger.warning(f"Cannot unregister non-existent kind: {key}")

    def get_pattern(self, kind: KindLike) -> Optional[Pattern]:
        return self._patterns.get(kind_key(kind))

    def list_kinds(self) -> List[str]:
        """List registered kinds in registration order"""
        return list(self._patterns.keys())

    def patterns(self) -> List[Pattern]:
        """Snapshot of registered patterns in registration order"""
        return list(self._patterns.values())

    def __contains__(self, kind: KindLike) -> bool:
        return kind_key(kind) in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def copy(self) -> "PatternRegistry":
        """Independent registry holding the same compiled patterns"""
        return PatternRegistry(self.patterns())

    def get_stats(self) -> RegistryStats:
        patterns = self.patterns()
        return RegistryStats(
            total_patterns=len(patterns),
            kinds=[p.kind for p in patterns],
            validated_kinds={p.kind for p in patterns if p.validator is not None}
        )


# Default registry instance
_default_registry: Optional[PatternRegistry] = None


def get_default_registry() -> PatternRegistry:
    """Get the default pattern registry (singleton)"""
    global _default_registry

    if _default_registry is None:
        _default_registry = PatternRegistry()
        logger.info("Created default pattern registry")

    return _default_registry


def reset_default_registry():
    """Reset the default registry (mainly for testing)"""
    global _default_registry
    _default_registry = None
    logger.info("Reset default pattern registry")
