"""Exact, regex and IUPAC pattern search on both strands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Pattern

from ..config import SEARCH_DEFAULTS
from ..io.fasta import SequenceRecord
from .complement import NUCLEOTIDE_COMPLEMENT, reverse_complement

SEARCH_TYPES = ("exact", "regex", "iupac")

IUPAC_CODES: Mapping[str, str] = MappingProxyType(
    {
        "R": "[AG]", "Y": "[CT]", "S": "[GC]", "W": "[AT]",
        "K": "[GT]", "M": "[AC]", "B": "[CGT]", "D": "[AGT]",
        "H": "[ACT]", "V": "[ACG]", "N": "[ACGT]",
    }
)

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, slots=True)
class PatternMatch:
    position: int
    match: str
    strand: str
    context: str


@dataclass(slots=True)
class RecordMatches:
    record: SequenceRecord
    sequence_length: int
    matches: List[PatternMatch] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)


@dataclass(slots=True)
class SearchSummary:
    total_sequences: int
    sequences_with_matches: int
    total_matches: int


def iupac_to_regex(pattern: str) -> str:
    return "".join(IUPAC_CODES.get(char, char) for char in pattern.upper())


def compile_pattern(pattern: str, search_type: str, case_sensitive: bool = False) -> Pattern[str]:
    """Build the regex used to scan sequences for ``pattern``."""
    if search_type == "exact":
        source = re.escape(pattern)
    elif search_type == "regex":
        source = pattern
    elif search_type == "iupac":
        source = iupac_to_regex(pattern)
    else:
        raise ValueError(f"Unknown search type: {search_type} (expected one of {', '.join(SEARCH_TYPES)})")

    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise ValueError(f"Invalid search pattern {pattern!r}: {exc}") from exc


def _scan(regex: Pattern[str], text: str) -> Iterable[re.Match[str]]:
    pos = 0
    while pos <= len(text):
        found = regex.search(text, pos)
        if found is None:
            return
        yield found
        # zero-length matches would never advance the scan
        pos = found.end() if found.end() > found.start() else found.start() + 1


def _context(text: str, start: int, end: int, flank: int) -> str:
    return text[max(0, start - flank) : min(len(text), end + flank)]


def search_sequence(
    sequence: str,
    regex: Pattern[str],
    case_sensitive: bool = False,
    include_reverse_complement: bool = False,
    flank: int = SEARCH_DEFAULTS.context,
) -> List[PatternMatch]:
    """Return all matches of ``regex`` in ``sequence`` sorted by position.

    Positions are 1-indexed on the forward strand, including those found on
    the reverse complement.
    """
    sequence = _WHITESPACE.sub("", sequence)
    length = len(sequence)
    matches: List[PatternMatch] = []

    forward = sequence if case_sensitive else sequence.upper()
    for found in _scan(regex, forward):
        matches.append(
            PatternMatch(
                position=found.start() + 1,
                match=found.group(0),
                strand="forward",
                context=_context(sequence, found.start(), found.end(), flank),
            )
        )

    if include_reverse_complement:
        rc_sequence = reverse_complement(sequence.upper(), NUCLEOTIDE_COMPLEMENT)
        for found in _scan(regex, rc_sequence):
            matched = found.group(0)
            matches.append(
                PatternMatch(
                    position=length - found.start() - len(matched) + 1,
                    match=matched,
                    strand="reverse",
                    context=_context(rc_sequence, found.start(), found.end(), flank),
                )
            )

    matches.sort(key=lambda item: item.position)
    return matches


def search_records(
    records: Iterable[SequenceRecord],
    pattern: str,
    search_type: str,
    case_sensitive: bool = False,
    include_reverse_complement: bool = False,
) -> tuple[List[RecordMatches], SearchSummary]:
    regex = compile_pattern(pattern, search_type, case_sensitive)
    results: List[RecordMatches] = []
    for record in records:
        matches = search_sequence(record.sequence, regex, case_sensitive, include_reverse_complement)
        results.append(
            RecordMatches(
                record=record,
                sequence_length=len(_WHITESPACE.sub("", record.sequence)),
                matches=matches,
            )
        )
    summary = SearchSummary(
        total_sequences=len(results),
        sequences_with_matches=sum(1 for result in results if result.match_count > 0),
        total_matches=sum(result.match_count for result in results),
    )
    return results, summary
