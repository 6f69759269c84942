"""fastakit - FASTA parsing and sequence analysis toolkit."""

__version__ = "0.1.0"
