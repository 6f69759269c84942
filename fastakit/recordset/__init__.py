"""Algorithms over whole record collections."""

from .duplicates import DUPLICATE_TYPES, DuplicateGroup, DuplicateReport, IndexedRecord, find_duplicates
from .extract import Coordinate, Extraction, ExtractionError, extract_subsequences
from .length import filter_by_length
from .merge import MergeFileStats, MergeResult, merge_sources
from .split import SPLIT_METHODS, SplitChunk, split_records

__all__ = [
    "DUPLICATE_TYPES",
    "DuplicateGroup",
    "DuplicateReport",
    "IndexedRecord",
    "find_duplicates",
    "Coordinate",
    "Extraction",
    "ExtractionError",
    "extract_subsequences",
    "filter_by_length",
    "MergeFileStats",
    "MergeResult",
    "merge_sources",
    "SPLIT_METHODS",
    "SplitChunk",
    "split_records",
]
