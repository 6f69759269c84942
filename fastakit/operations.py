"""Named FASTA operations: read input, run the core algorithms, shape results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .analysis.complement import reverse_complement
from .analysis.composition import nucleotide_stats, overall_stats
from .analysis.search import compile_pattern, search_records
from .analysis.translation import check_frame, codon_table, translate
from .analysis.validation import check_sequence_type, validate_sequence
from .config import SPLIT_DEFAULTS
from .io.fasta import SequenceRecord, format_fasta, read_fasta, write_fasta
from .io.paths import ensure_dir, write_text
from .logging_utils import get_logger
from .recordset.duplicates import DuplicateGroup, check_duplicate_type, find_duplicates
from .recordset.extract import Coordinate, extract_subsequences
from .recordset.length import filter_by_length
from .recordset.merge import merge_sources
from .recordset.split import check_split_method, split_records


class EmptyFastaError(ValueError):
    """Raised when an operation needs at least one record and got none."""


class SequenceNotFoundError(KeyError):
    """Raised when a requested sequence id is absent from the file."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Sequence not found"


def _round2(value: float) -> float:
    return round(value, 2)


def _require_records(records: Sequence[SequenceRecord], path: Path) -> None:
    if not records:
        raise EmptyFastaError(f"No FASTA records found in {path}")


def _record_summary(record: SequenceRecord) -> Dict[str, Any]:
    return {"id": record.id, "description": record.description, "length": len(record.sequence)}


def load_fasta(path: Path, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    records = read_fasta(path)
    logger.info("Loaded %s records from %s", len(records), path)
    return {"total_records": len(records), "records": [_record_summary(record) for record in records]}


def summarize_fasta(path: Path, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    records = read_fasta(path)
    _require_records(records, path)
    lengths = [len(record.sequence) for record in records]
    summary = {
        "num_sequences": len(records),
        "average_length": sum(lengths) / len(lengths),
        "longest": max(lengths),
        "shortest": min(lengths),
        "total_length": sum(lengths),
    }
    logger.info("Summarized %s: %s sequences, %s residues", path, summary["num_sequences"], summary["total_length"])
    return summary


def get_sequence_by_id(path: Path, sequence_id: str, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    for record in read_fasta(path):
        if record.id == sequence_id:
            logger.debug("Found %s in %s", sequence_id, path)
            return asdict(record)
    raise SequenceNotFoundError(f"Sequence ID {sequence_id} not found")


def filter_fasta(path: Path, min_length: int, max_length: int, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    records = read_fasta(path)
    kept = filter_by_length(records, min_length, max_length)
    logger.info("Length filter [%s, %s]: kept %s/%s records", min_length, max_length, len(kept), len(records))
    return {
        "summary": {
            "total_sequences": len(records),
            "matching_sequences": len(kept),
            "min_length": min_length,
            "max_length": max_length,
        },
        "matches": [_record_summary(record) for record in kept],
    }


def write_sequences(path: Path, sequences: Iterable[Mapping[str, Any]], logger=None) -> str:
    logger = logger or get_logger()
    records = []
    for item in sequences:
        if "id" not in item or "sequence" not in item:
            raise ValueError(f"Each sequence needs an id and a sequence: {dict(item)}")
        records.append(
            SequenceRecord(
                id=str(item["id"]),
                description=str(item.get("description") or ""),
                sequence=str(item["sequence"]),
            )
        )
    write_fasta(Path(path), records)
    logger.info("FASTA -> %s", path)
    return f"Successfully wrote {len(records)} sequences to {path}"


def validate_fasta(path: Path, sequence_type: str, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    check_sequence_type(sequence_type)
    records = read_fasta(path)
    results = [validate_sequence(record.id, record.sequence, sequence_type) for record in records]
    valid = sum(1 for result in results if result.is_valid)
    logger.info("Validated %s sequences as %s: %s valid", len(results), sequence_type, valid)
    return {
        "summary": {
            "total_sequences": len(results),
            "valid_sequences": valid,
            "invalid_sequences": len(results) - valid,
        },
        "results": [asdict(result) for result in results],
    }


def reverse_complement_fasta(
    path: Path,
    output_path: Optional[Path] = None,
    sequence_ids: Optional[Sequence[str]] = None,
    logger=None,
) -> Dict[str, Any] | str:
    logger = logger or get_logger()
    records = read_fasta(path)
    wanted = set(sequence_ids) if sequence_ids is not None else None

    processed: List[Dict[str, Any]] = []
    for record in records:
        if wanted is not None and record.id not in wanted:
            continue
        rc = reverse_complement(record.sequence)
        processed.append(
            {
                "id": f"{record.id}_rc",
                "description": f"{record.description} (reverse complement)".strip(),
                "sequence": rc,
                "original_length": len(record.sequence),
                "processed_length": len(rc),
            }
        )

    logger.info("Reverse complemented %s sequences from %s", len(processed), path)
    if output_path:
        write_fasta(Path(output_path), _as_records(processed))
        logger.info("Reverse complement FASTA -> %s", output_path)
        return f"Successfully wrote {len(processed)} reverse complement sequences to {output_path}"
    return {"processed_count": len(processed), "sequences": processed}


@dataclass(slots=True)
class TranslateRequest:
    path: Path
    reading_frame: int
    genetic_code: str = "standard"
    output_path: Optional[Path] = None


def translate_fasta(request: TranslateRequest, logger=None) -> Dict[str, Any] | str:
    logger = logger or get_logger()
    check_frame(request.reading_frame)
    codon_table(request.genetic_code)
    records = read_fasta(request.path)

    translated: List[Dict[str, Any]] = []
    for record in records:
        result = translate(record.sequence, request.reading_frame, request.genetic_code)
        translated.append(
            {
                "id": f"{record.id}_frame{request.reading_frame}",
                "description": f"{record.description} (translated frame {request.reading_frame})".strip(),
                "sequence": result.protein,
                "original_length": result.input_length,
                "protein_length": result.protein_length,
                "stop_codons": result.stop_codons,
                "reading_frame": result.reading_frame,
                "genetic_code": result.genetic_code,
            }
        )

    logger.info(
        "Translated %s sequences (frame %s, %s code)",
        len(translated),
        request.reading_frame,
        request.genetic_code,
    )
    if request.output_path:
        write_fasta(Path(request.output_path), _as_records(translated))
        logger.info("Protein FASTA -> %s", request.output_path)
        return f"Successfully translated {len(translated)} sequences to {request.output_path}"
    return {
        "translated_count": len(translated),
        "reading_frame": request.reading_frame,
        "genetic_code": request.genetic_code,
        "sequences": translated,
    }


@dataclass(slots=True)
class SearchRequest:
    path: Path
    pattern: str
    search_type: str
    case_sensitive: bool = False
    include_reverse_complement: bool = False


def search_fasta(request: SearchRequest, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    compile_pattern(request.pattern, request.search_type, request.case_sensitive)
    records = read_fasta(request.path)
    results, summary = search_records(
        records,
        request.pattern,
        request.search_type,
        request.case_sensitive,
        request.include_reverse_complement,
    )
    logger.info(
        "Search %r (%s): %s matches in %s/%s sequences",
        request.pattern,
        request.search_type,
        summary.total_matches,
        summary.sequences_with_matches,
        summary.total_sequences,
    )
    return {
        "search_pattern": request.pattern,
        "search_type": request.search_type,
        "case_sensitive": request.case_sensitive,
        "include_reverse_complement": request.include_reverse_complement,
        "summary": asdict(summary),
        "results": [
            {
                "id": result.record.id,
                "description": result.record.description,
                "sequence_length": result.sequence_length,
                "match_count": result.match_count,
                "matches": [asdict(match) for match in result.matches],
            }
            for result in results
        ],
    }


def gc_content(path: Path, window_size: Optional[int] = None, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    records = read_fasta(path)
    _require_records(records, path)

    per_record = [nucleotide_stats(record.sequence, window_size) for record in records]
    sequences = []
    for record, stats in zip(records, per_record):
        entry: Dict[str, Any] = {"id": record.id, "description": record.description}
        entry.update({key: value for key, value in asdict(stats).items() if value is not None})
        sequences.append(entry)

    overall = overall_stats(per_record)
    logger.info("GC content for %s sequences: mean %.2f%%", overall.total_sequences, overall.mean_gc)
    return {"overall_stats": asdict(overall), "window_size": window_size, "sequences": sequences}


@dataclass(slots=True)
class SplitRequest:
    path: Path
    split_by: str
    output_dir: Path
    value: Optional[float] = None
    prefix: str = SPLIT_DEFAULTS.prefix


def split_fasta(request: SplitRequest, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    check_split_method(request.split_by)
    records = read_fasta(request.path)
    chunks = split_records(records, request.split_by, request.value)

    out_dir = ensure_dir(Path(request.output_dir))
    files = []
    for chunk in chunks:
        filename = out_dir / f"{request.prefix}_{chunk.name}.fasta"
        content = format_fasta(chunk.records)
        write_text(filename, content)
        files.append(
            {
                "filename": str(filename),
                "sequence_count": len(chunk.records),
                "size_kb": _round2(len(content.encode("utf-8")) / 1024),
            }
        )

    if not files:
        logger.warning("No sequences in %s; no split files written.", request.path)
    logger.info("Split %s into %s files -> %s", request.path, len(files), out_dir)
    return {
        "summary": {
            "original_file": str(request.path),
            "original_sequences": len(records),
            "output_directory": str(out_dir),
            "split_method": request.split_by,
            "split_value": request.value,
            "files_created": len(files),
            "total_size_kb": _round2(sum(item["size_kb"] for item in files)),
        },
        "files": files,
    }


@dataclass(slots=True)
class MergeRequest:
    input_paths: List[Path]
    output_path: Path
    remove_duplicates: bool = False
    add_file_prefix: bool = False


def merge_fasta_files(request: MergeRequest, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    merged = merge_sources(request.input_paths, request.remove_duplicates, request.add_file_prefix, logger)
    write_fasta(Path(request.output_path), merged.records)

    lengths = [len(record.sequence) for record in merged.records]
    length_stats = {
        "mean": _round2(sum(lengths) / len(lengths)) if lengths else 0.0,
        "min": min(lengths) if lengths else 0,
        "max": max(lengths) if lengths else 0,
        "total": sum(lengths),
    }
    logger.info(
        "Merged %s files into %s sequences -> %s",
        len(request.input_paths),
        len(merged.records),
        request.output_path,
    )
    if merged.failed_files:
        logger.warning("%s input files could not be read", len(merged.failed_files))

    file_details = []
    for stats in merged.files:
        if stats.error is not None:
            file_details.append({"file": stats.file, "error": stats.error})
        else:
            file_details.append(
                {
                    "file": stats.file,
                    "original_count": stats.original_count,
                    "added_count": stats.added_count,
                    "duplicate_count": stats.duplicate_count,
                }
            )
    return {
        "summary": {
            "input_files": len(request.input_paths),
            "output_file": str(request.output_path),
            "total_sequences": len(merged.records),
            "remove_duplicates": request.remove_duplicates,
            "add_file_prefix": request.add_file_prefix,
            "duplicates_removed": merged.duplicates_removed if request.remove_duplicates else 0,
        },
        "length_stats": length_stats,
        "file_details": file_details,
    }


@dataclass(slots=True)
class ExtractRequest:
    path: Path
    coordinates: List[Coordinate | Mapping[str, Any]] = field(default_factory=list)
    output_path: Optional[Path] = None


def extract_fasta(request: ExtractRequest, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    coordinates = [
        item if isinstance(item, Coordinate) else Coordinate.from_mapping(item) for item in request.coordinates
    ]
    records = read_fasta(request.path)
    extracted, errors = extract_subsequences(records, coordinates)

    if request.output_path and extracted:
        write_fasta(Path(request.output_path), [item.record for item in extracted])
        logger.info("Extracted FASTA -> %s", request.output_path)
    logger.info("Extracted %s/%s ranges (%s errors)", len(extracted), len(coordinates), len(errors))

    return {
        "summary": {
            "total_requests": len(coordinates),
            "successful_extractions": len(extracted),
            "errors": len(errors),
            "output_file": str(request.output_path) if request.output_path else None,
        },
        "extracted_sequences": [
            {
                "id": item.record.id,
                "description": item.record.description,
                "sequence": item.record.sequence,
                "source_sequence": item.source_sequence,
                "coordinates": {"start": item.start, "end": item.end},
                "length": len(item.record.sequence),
                "original_length": item.original_length,
            }
            for item in extracted
        ],
        "errors": [{key: value for key, value in asdict(error).items() if value is not None} for error in errors],
    }


@dataclass(slots=True)
class DuplicatesRequest:
    path: Path
    duplicate_type: str
    case_sensitive: bool = False
    output_duplicates: Optional[Path] = None
    output_unique: Optional[Path] = None


def _group_payload(group: DuplicateGroup, tagged: bool) -> Dict[str, Any]:
    members = [
        {"id": member.record.id, "description": member.record.description, "index": member.index}
        for member in group.members
    ]
    if group.kind == "id":
        payload: Dict[str, Any] = {"id": group.key, "count": group.count, "indices": group.indices}
    else:
        payload = {
            "sequence_hash": group.preview,
            "full_sequence_length": len(group.key),
            "count": group.count,
            "indices": group.indices,
        }
    payload["sequences"] = members
    if tagged:
        payload = {"type": group.kind, **payload}
    return payload


def find_duplicates_fasta(request: DuplicatesRequest, logger=None) -> Dict[str, Any]:
    logger = logger or get_logger()
    check_duplicate_type(request.duplicate_type)
    records = read_fasta(request.path)
    report = find_duplicates(records, request.duplicate_type, request.case_sensitive)

    if request.output_duplicates and report.duplicate_indices:
        write_fasta(Path(request.output_duplicates), [records[index] for index in report.duplicate_indices])
        logger.info("Duplicate FASTA -> %s", request.output_duplicates)
    elif request.output_duplicates:
        logger.warning("No duplicates found; %s not written.", request.output_duplicates)
    if request.output_unique and report.unique:
        write_fasta(Path(request.output_unique), report.unique)
        logger.info("Unique FASTA -> %s", request.output_unique)

    logger.info(
        "Duplicates (%s): %s records in %s groups, %s unique",
        request.duplicate_type,
        len(report.duplicate_indices),
        len(report.groups),
        len(report.unique),
    )
    tagged = request.duplicate_type == "both"
    return {
        "summary": {
            "total_sequences": len(records),
            "duplicate_type": request.duplicate_type,
            "case_sensitive": request.case_sensitive,
            "duplicate_count": len(report.duplicate_indices),
            "unique_count": len(report.unique),
            "duplicate_id_groups": len(report.id_groups),
            "duplicate_sequence_groups": len(report.sequence_groups),
        },
        "duplicates": [_group_payload(group, tagged) for group in report.groups],
    }


def _as_records(items: Iterable[Mapping[str, Any]]) -> List[SequenceRecord]:
    return [SequenceRecord(str(item["id"]), str(item["description"]), str(item["sequence"])) for item in items]
