"""Command-line interface for fastakit."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable

from . import __version__
from .analysis.search import SEARCH_TYPES
from .analysis.translation import GENETIC_CODES, VALID_FRAMES
from .analysis.validation import SEQUENCE_TYPES
from .config import RuntimeConfig, collect_runtime_config
from .io.paths import require_input
from .io.tables import write_table
from .logging_utils import configure_logging, get_logger
from .operations import (
    DuplicatesRequest,
    ExtractRequest,
    MergeRequest,
    SearchRequest,
    SplitRequest,
    TranslateRequest,
    extract_fasta,
    filter_fasta,
    find_duplicates_fasta,
    gc_content,
    get_sequence_by_id,
    load_fasta,
    merge_fasta_files,
    reverse_complement_fasta,
    search_fasta,
    split_fasta,
    summarize_fasta,
    translate_fasta,
    validate_fasta,
    write_sequences,
)
from .recordset.duplicates import DUPLICATE_TYPES
from .recordset.split import SPLIT_METHODS

Handler = Callable[[argparse.Namespace], Any]


def build_parser(config: RuntimeConfig | None = None) -> argparse.ArgumentParser:
    config = config or RuntimeConfig()
    parser = argparse.ArgumentParser(
        prog="fastakit",
        description="fastakit - FASTA parsing, validation and sequence analysis.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=config.verbose,
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_record_parsers(subparsers)
    _add_analysis_parsers(subparsers)
    _add_file_parsers(subparsers, config)
    return parser


def _add_record_parsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("load", help="Parse a FASTA file and list its records.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.set_defaults(handler=_handle_load)

    parser = subparsers.add_parser("summarize", help="Count sequences and report length statistics.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--table-out", type=Path, help="Optional CSV/Parquet path for the summary row.")
    parser.set_defaults(handler=_handle_summarize)

    parser = subparsers.add_parser("get", help="Fetch a single sequence by ID.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--id", dest="sequence_id", required=True, help="Sequence identifier.")
    parser.set_defaults(handler=_handle_get)

    parser = subparsers.add_parser("filter", help="List sequences within a length range.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--min-len", type=int, required=True, help="Minimum sequence length (inclusive).")
    parser.add_argument("--max-len", type=int, required=True, help="Maximum sequence length (inclusive).")
    parser.set_defaults(handler=_handle_filter)

    parser = subparsers.add_parser("write", help="Write sequences from a JSON array to a FASTA file.")
    parser.add_argument("--out-fasta", type=Path, required=True, help="Output FASTA file path.")
    parser.add_argument(
        "--sequences-json",
        type=Path,
        required=True,
        help="JSON file holding a list of {id, description, sequence} objects.",
    )
    parser.set_defaults(handler=_handle_write)

    parser = subparsers.add_parser("validate", help="Validate residues against an alphabet.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument(
        "--type",
        dest="sequence_type",
        choices=SEQUENCE_TYPES,
        required=True,
        help="Alphabet to validate against (auto detects DNA, RNA, then protein).",
    )
    parser.add_argument("--table-out", type=Path, help="Optional CSV/Parquet path for per-record results.")
    parser.set_defaults(handler=_handle_validate)


def _add_analysis_parsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("revcomp", help="Reverse complement DNA sequences.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--out-fasta", type=Path, help="Write results to this FASTA file.")
    parser.add_argument(
        "--ids",
        nargs="+",
        dest="sequence_ids",
        help="Only process these sequence IDs.",
    )
    parser.set_defaults(handler=_handle_revcomp)

    parser = subparsers.add_parser("translate", help="Translate DNA sequences to protein.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument(
        "--frame",
        type=int,
        choices=VALID_FRAMES,
        required=True,
        help="Reading frame (1-3 forward, -1 to -3 reverse).",
    )
    parser.add_argument(
        "--code",
        dest="genetic_code",
        choices=list(GENETIC_CODES),
        default="standard",
        help="Genetic code table (default: standard).",
    )
    parser.add_argument("--out-fasta", type=Path, help="Write proteins to this FASTA file.")
    parser.set_defaults(handler=_handle_translate)

    parser = subparsers.add_parser("search", help="Search sequences for a pattern or motif.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--pattern", required=True, help="Pattern to search for.")
    parser.add_argument(
        "--type",
        dest="search_type",
        choices=SEARCH_TYPES,
        required=True,
        help="Pattern interpretation: exact, regex or iupac.",
    )
    parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly.")
    parser.add_argument(
        "--reverse-complement",
        dest="include_reverse_complement",
        action="store_true",
        help="Also search the reverse complement strand.",
    )
    parser.set_defaults(handler=_handle_search)

    parser = subparsers.add_parser("gc", help="Nucleotide composition and GC content.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--window", dest="window_size", type=int, help="Sliding window size.")
    parser.add_argument("--table-out", type=Path, help="Optional CSV/Parquet path for per-record stats.")
    parser.set_defaults(handler=_handle_gc)

    parser = subparsers.add_parser("duplicates", help="Find duplicate IDs or sequences.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument(
        "--type",
        dest="duplicate_type",
        choices=DUPLICATE_TYPES,
        required=True,
        help="Group duplicates by id, sequence or both.",
    )
    parser.add_argument("--case-sensitive", action="store_true", help="Compare sequences case-sensitively.")
    parser.add_argument("--out-duplicates", type=Path, help="Write duplicate records to this FASTA file.")
    parser.add_argument("--out-unique", type=Path, help="Write the de-duplicated set to this FASTA file.")
    parser.set_defaults(handler=_handle_duplicates)


def _add_file_parsers(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    config: RuntimeConfig,
) -> None:
    parser = subparsers.add_parser("split", help="Split a FASTA file into several files.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument("--by", dest="split_by", choices=SPLIT_METHODS, required=True, help="Split method.")
    parser.add_argument("--out-dir", type=Path, required=True, help="Directory for split files.")
    parser.add_argument(
        "--value",
        type=float,
        help=(
            f"Sequences per file for count (default: {config.split_count}) "
            f"or megabytes per file for size (default: {config.split_size_mb})."
        ),
    )
    parser.add_argument(
        "--prefix",
        default=config.split_prefix,
        help=f"Output filename prefix (default: {config.split_prefix}).",
    )
    parser.set_defaults(handler=_handle_split, split_count=config.split_count, split_size_mb=config.split_size_mb)

    parser = subparsers.add_parser("merge", help="Merge several FASTA files.")
    parser.add_argument("--in-fasta", type=Path, nargs="+", required=True, help="Input FASTA files.")
    parser.add_argument("--out-fasta", type=Path, required=True, help="Merged FASTA output path.")
    parser.add_argument("--dedupe", action="store_true", help="Drop records whose ID was already merged.")
    parser.add_argument("--file-prefix", action="store_true", help="Prefix IDs with the source file stem.")
    parser.set_defaults(handler=_handle_merge)

    parser = subparsers.add_parser("extract", help="Extract subsequences by coordinates.")
    parser.add_argument("--in-fasta", type=Path, required=True, help="Input FASTA file path.")
    parser.add_argument(
        "--region",
        action="append",
        dest="regions",
        default=[],
        help="Region as ID:START-END[=NAME] (1-indexed, inclusive). Repeatable.",
    )
    parser.add_argument(
        "--coordinates-json",
        type=Path,
        help="JSON file holding a list of {sequence_id, start, end, name} objects.",
    )
    parser.add_argument("--out-fasta", type=Path, help="Write extracted sequences to this FASTA file.")
    parser.set_defaults(handler=_handle_extract)


def _handle_load(args: argparse.Namespace) -> Any:
    return load_fasta(require_input(args.in_fasta), get_logger())


def _handle_summarize(args: argparse.Namespace) -> Any:
    summary = summarize_fasta(require_input(args.in_fasta), get_logger())
    if args.table_out:
        write_table([{"file": str(args.in_fasta), **summary}], args.table_out)
    return summary


def _handle_get(args: argparse.Namespace) -> Any:
    return get_sequence_by_id(require_input(args.in_fasta), args.sequence_id, get_logger())


def _handle_filter(args: argparse.Namespace) -> Any:
    return filter_fasta(require_input(args.in_fasta), args.min_len, args.max_len, get_logger())


def _handle_write(args: argparse.Namespace) -> Any:
    sequences = json.loads(require_input(args.sequences_json).read_text(encoding="utf-8"))
    if not isinstance(sequences, list):
        raise ValueError("Sequences JSON must be a list of objects")
    return write_sequences(args.out_fasta, sequences, get_logger())


def _handle_validate(args: argparse.Namespace) -> Any:
    result = validate_fasta(require_input(args.in_fasta), args.sequence_type, get_logger())
    if args.table_out:
        rows = [
            {**row, "invalid_characters": "".join(row["invalid_characters"])} for row in result["results"]
        ]
        write_table(rows, args.table_out)
    return result


def _handle_revcomp(args: argparse.Namespace) -> Any:
    return reverse_complement_fasta(
        require_input(args.in_fasta),
        output_path=args.out_fasta,
        sequence_ids=args.sequence_ids,
        logger=get_logger(),
    )


def _handle_translate(args: argparse.Namespace) -> Any:
    request = TranslateRequest(
        path=require_input(args.in_fasta),
        reading_frame=args.frame,
        genetic_code=args.genetic_code,
        output_path=args.out_fasta,
    )
    return translate_fasta(request, get_logger())


def _handle_search(args: argparse.Namespace) -> Any:
    request = SearchRequest(
        path=require_input(args.in_fasta),
        pattern=args.pattern,
        search_type=args.search_type,
        case_sensitive=args.case_sensitive,
        include_reverse_complement=args.include_reverse_complement,
    )
    return search_fasta(request, get_logger())


def _handle_gc(args: argparse.Namespace) -> Any:
    result = gc_content(require_input(args.in_fasta), args.window_size, get_logger())
    if args.table_out:
        rows = []
        for entry in result["sequences"]:
            row = {key: value for key, value in entry.items() if key not in ("counts", "sliding_window")}
            row.update({f"count_{base}": count for base, count in entry["counts"].items()})
            window = row.pop("sliding_window_stats", None)
            if window:
                row.update({f"window_{key}": value for key, value in window.items()})
            rows.append(row)
        write_table(rows, args.table_out)
    return result


def _handle_duplicates(args: argparse.Namespace) -> Any:
    request = DuplicatesRequest(
        path=require_input(args.in_fasta),
        duplicate_type=args.duplicate_type,
        case_sensitive=args.case_sensitive,
        output_duplicates=args.out_duplicates,
        output_unique=args.out_unique,
    )
    return find_duplicates_fasta(request, get_logger())


def _handle_split(args: argparse.Namespace) -> Any:
    value = args.value
    if value is None and args.split_by == "count":
        value = args.split_count
    elif value is None and args.split_by == "size":
        value = args.split_size_mb
    request = SplitRequest(
        path=require_input(args.in_fasta),
        split_by=args.split_by,
        output_dir=args.out_dir,
        value=value,
        prefix=args.prefix,
    )
    return split_fasta(request, get_logger())


def _handle_merge(args: argparse.Namespace) -> Any:
    request = MergeRequest(
        input_paths=list(args.in_fasta),
        output_path=args.out_fasta,
        remove_duplicates=args.dedupe,
        add_file_prefix=args.file_prefix,
    )
    return merge_fasta_files(request, get_logger())


def _handle_extract(args: argparse.Namespace) -> Any:
    coordinates: list[dict[str, Any]] = [parse_region(region) for region in args.regions]
    if args.coordinates_json:
        loaded = json.loads(require_input(args.coordinates_json).read_text(encoding="utf-8"))
        if not isinstance(loaded, list):
            raise ValueError("Coordinates JSON must be a list of objects")
        coordinates.extend(loaded)
    if not coordinates:
        raise ValueError("At least one --region or --coordinates-json entry is required")
    request = ExtractRequest(
        path=require_input(args.in_fasta),
        coordinates=coordinates,
        output_path=args.out_fasta,
    )
    return extract_fasta(request, get_logger())


def parse_region(text: str) -> dict[str, Any]:
    """Parse ``ID:START-END[=NAME]`` into a coordinate mapping."""
    region, _, name = text.partition("=")
    sequence_id, sep, span = region.rpartition(":")
    start, dash, end = span.partition("-")
    if not sep or not dash or not sequence_id:
        raise ValueError(f"Region must look like ID:START-END[=NAME], got {text!r}")
    try:
        return {"sequence_id": sequence_id, "start": int(start), "end": int(end), "name": name or None}
    except ValueError:
        raise ValueError(f"Region coordinates must be integers, got {text!r}") from None


def _emit(result: Any, indent: int) -> None:
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=indent, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    config = collect_runtime_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    logger = get_logger()
    handler: Handler = args.handler

    try:
        result = handler(args)
    except FileNotFoundError as exc:
        logger.error(str(exc))
        return 1
    except (KeyError, ValueError) as exc:
        logger.error(exc.args[0] if exc.args else str(exc))
        return 1
    except Exception:  # pragma: no cover - safety net
        logger.exception("Unexpected error")
        return 1

    _emit(result, config.json_indent)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
