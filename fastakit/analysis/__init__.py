"""Pure sequence algorithms."""

from .complement import COMPLEMENT, NUCLEOTIDE_COMPLEMENT, reverse_complement
from .composition import NucleotideStats, OverallStats, WindowStats, nucleotide_stats, overall_stats, sliding_window_gc
from .search import PatternMatch, RecordMatches, SearchSummary, compile_pattern, search_records, search_sequence
from .translation import GENETIC_CODES, Translation, translate
from .validation import SEQUENCE_TYPES, ValidationResult, validate_sequence

__all__ = [
    "COMPLEMENT",
    "NUCLEOTIDE_COMPLEMENT",
    "reverse_complement",
    "NucleotideStats",
    "OverallStats",
    "WindowStats",
    "nucleotide_stats",
    "overall_stats",
    "sliding_window_gc",
    "PatternMatch",
    "RecordMatches",
    "SearchSummary",
    "compile_pattern",
    "search_records",
    "search_sequence",
    "GENETIC_CODES",
    "Translation",
    "translate",
    "SEQUENCE_TYPES",
    "ValidationResult",
    "validate_sequence",
]
