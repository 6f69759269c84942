"""Codon translation in six reading frames."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .complement import NUCLEOTIDE_COMPLEMENT, reverse_complement

_NON_NUCLEOTIDE = re.compile(r"[^ATCGN]")

VALID_FRAMES = (1, 2, 3, -1, -2, -3)

_STANDARD = {
    "TTT": "F", "TTC": "F", "TTA": "L", "TTG": "L",
    "TCT": "S", "TCC": "S", "TCA": "S", "TCG": "S",
    "TAT": "Y", "TAC": "Y", "TAA": "*", "TAG": "*",
    "TGT": "C", "TGC": "C", "TGA": "*", "TGG": "W",
    "CTT": "L", "CTC": "L", "CTA": "L", "CTG": "L",
    "CCT": "P", "CCC": "P", "CCA": "P", "CCG": "P",
    "CAT": "H", "CAC": "H", "CAA": "Q", "CAG": "Q",
    "CGT": "R", "CGC": "R", "CGA": "R", "CGG": "R",
    "ATT": "I", "ATC": "I", "ATA": "I", "ATG": "M",
    "ACT": "T", "ACC": "T", "ACA": "T", "ACG": "T",
    "AAT": "N", "AAC": "N", "AAA": "K", "AAG": "K",
    "AGT": "S", "AGC": "S", "AGA": "R", "AGG": "R",
    "GTT": "V", "GTC": "V", "GTA": "V", "GTG": "V",
    "GCT": "A", "GCC": "A", "GCA": "A", "GCG": "A",
    "GAT": "D", "GAC": "D", "GAA": "E", "GAG": "E",
    "GGT": "G", "GGC": "G", "GGA": "G", "GGG": "G",
}

# NCBI translation table 2
_VERTEBRATE_MITOCHONDRIAL = {**_STANDARD, "AGA": "*", "AGG": "*", "ATA": "M", "TGA": "W"}

GENETIC_CODES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "standard": MappingProxyType(dict(_STANDARD)),
        "vertebrate_mitochondrial": MappingProxyType(_VERTEBRATE_MITOCHONDRIAL),
        # NCBI table 11 shares the standard amino-acid assignments.
        "bacterial": MappingProxyType(dict(_STANDARD)),
    }
)


@dataclass(frozen=True, slots=True)
class Translation:
    protein: str
    stop_codons: int
    input_length: int
    protein_length: int
    reading_frame: int
    genetic_code: str


def codon_table(name: str) -> Mapping[str, str]:
    try:
        return GENETIC_CODES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported genetic code: {name} (expected one of {', '.join(GENETIC_CODES)})"
        ) from None


def check_frame(frame: int) -> int:
    if frame not in VALID_FRAMES:
        raise ValueError(f"Reading frame must be one of {VALID_FRAMES}, got {frame}")
    return frame


def translate(sequence: str, frame: int = 1, genetic_code: str = "standard") -> Translation:
    """Translate a nucleotide sequence in the given reading frame.

    Negative frames read the reverse complement. A trailing partial codon is
    dropped and codons absent from the table translate to ``X``.
    """
    check_frame(frame)
    table = codon_table(genetic_code)

    normalized = _NON_NUCLEOTIDE.sub("N", sequence.upper())
    offset = frame
    if frame < 0:
        normalized = reverse_complement(normalized, NUCLEOTIDE_COMPLEMENT)
        offset = -frame
    shifted = normalized[offset - 1 :]

    protein = "".join(
        table.get(shifted[idx : idx + 3], "X") for idx in range(0, len(shifted) - 2, 3)
    )
    return Translation(
        protein=protein,
        stop_codons=protein.count("*"),
        input_length=len(sequence),
        protein_length=len(protein),
        reading_frame=frame,
        genetic_code=genetic_code,
    )
