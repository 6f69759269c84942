"""Alphabet validation for DNA, RNA and protein sequences."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping

SEQUENCE_TYPES = ("dna", "rna", "protein", "auto")

ALPHABETS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "dna": frozenset("ATCGN"),
        "rna": frozenset("AUCGN"),
        "protein": frozenset("ACDEFGHIKLMNPQRSTVWY*-"),
    }
)

_WHITESPACE = re.compile(r"\s")


@dataclass(slots=True)
class ValidationResult:
    id: str
    length: int
    is_valid: bool
    detected_type: str
    invalid_characters: List[str] = field(default_factory=list)


def check_sequence_type(sequence_type: str) -> str:
    if sequence_type not in SEQUENCE_TYPES:
        raise ValueError(
            f"Unsupported sequence type: {sequence_type} (expected one of {', '.join(SEQUENCE_TYPES)})"
        )
    return sequence_type


def _fits(sequence: str, alphabet: frozenset[str]) -> bool:
    return all(char in alphabet for char in sequence)


def validate_sequence(record_id: str, sequence: str, sequence_type: str) -> ValidationResult:
    """Check ``sequence`` against one alphabet, or detect the first that fits.

    In ``auto`` mode DNA is tried before RNA and protein; a sequence fitting
    none is reported as ``unknown``.
    """
    check_sequence_type(sequence_type)
    cleaned = _WHITESPACE.sub("", sequence).upper()

    if sequence_type == "auto":
        detected = next((name for name in ("dna", "rna", "protein") if _fits(cleaned, ALPHABETS[name])), "unknown")
        is_valid = detected != "unknown"
    else:
        detected = sequence_type
        is_valid = _fits(cleaned, ALPHABETS[sequence_type])

    alphabet = ALPHABETS.get(detected)
    invalid: List[str] = []
    if alphabet is not None:
        for char in cleaned:
            if char not in alphabet and char not in invalid:
                invalid.append(char)

    return ValidationResult(
        id=record_id,
        length=len(cleaned),
        is_valid=is_valid,
        detected_type=detected,
        invalid_characters=invalid,
    )
