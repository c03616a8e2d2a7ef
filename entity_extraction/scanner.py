"""
Scanner: applies every pattern to the original text independently
"""
from typing import Dict, List, Optional

import regex as re

from .base import Candidate, Pattern
from logger import get_logger

logger = get_logger(__name__)

_WHITESPACE = re.compile(r'\s+')


class Scanner:
    """Collects candidates per kind in order of appearance"""

    def __init__(self, match_timeout: Optional[float] = None, max_timeouts: int = 10):
        """
        Args:
            match_timeout: Seconds allowed for one search, None for no limit
            max_timeouts: Timed out searches tolerated per kind before giving up
        """
        self.match_timeout = match_timeout
        self.max_timeouts = max_timeouts

    def scan(self, text: str, patterns: List[Pattern]) -> Dict[str, List[Candidate]]:
        """
        Scan text with each pattern

        Args:
            text: Input text
            patterns: Patterns to apply, in result order

        Returns:
            Mapping of kind to its candidates, in match order
        """
        return {pattern.kind: self.scan_pattern(text, pattern) for pattern in patterns}

    def scan_pattern(self, text: str, pattern: Pattern) -> List[Candidate]:
        """
        Find every match of one pattern

        Each search from the current position is bounded by match_timeout.
        A search that times out skips to the next whitespace-delimited token
        and keeps what was already found.
        """
        candidates = []
        timeouts = 0
        pos = 0

        while pos <= len(text):
            try:
                match = pattern.compiled_regex.search(text, pos=pos, timeout=self.match_timeout)
            except TimeoutError:
                timeouts += 1
                next_break = _WHITESPACE.search(text, pos + 1)
                if timeouts > self.max_timeouts or next_break is None:
                    logger.warning(
                        f"Pattern '{pattern.name}' timed out {timeouts} time(s) on "
                        f"{len(text)} chars, stopping at offset {pos}"
                    )
                    break
                logger.warning(
                    f"Pattern '{pattern.name}' timed out after {self.match_timeout}s "
                    f"at offset {pos}, skipping to offset {next_break.end()}"
                )
                pos = next_break.end()
                continue

            if match is None:
                break

            candidates.append(Candidate(
                kind=pattern.kind,
                text=match.group(0),
                start=match.start(),
                end=match.end(),
                pattern_name=pattern.name
            ))
            # Step past empty matches
            pos = match.end() if match.end() > match.start() else match.end() + 1

        return candidates
