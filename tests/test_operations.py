"""Tests for the named FASTA operations."""

from __future__ import annotations

from pathlib import Path

import pytest

from fastakit.io.fasta import read_fasta
from fastakit.operations import (
    DuplicatesRequest,
    EmptyFastaError,
    ExtractRequest,
    MergeRequest,
    SearchRequest,
    SequenceNotFoundError,
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

SAMPLE = """>seq1 first record
ATGAAATAG
>seq2 second record
GGCCGGCCAT
>seq3
ATGC
"""


@pytest.fixture()
def sample_fasta(tmp_path: Path) -> Path:
    path = tmp_path / "sample.fasta"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture()
def empty_fasta(tmp_path: Path) -> Path:
    path = tmp_path / "empty.fasta"
    path.write_text("", encoding="utf-8")
    return path


def test_load(sample_fasta: Path) -> None:
    result = load_fasta(sample_fasta)
    assert result["total_records"] == 3
    assert result["records"][0] == {"id": "seq1", "description": "first record", "length": 9}


def test_summarize(sample_fasta: Path, empty_fasta: Path) -> None:
    summary = summarize_fasta(sample_fasta)
    assert summary == {
        "num_sequences": 3,
        "average_length": 23 / 3,
        "longest": 10,
        "shortest": 4,
        "total_length": 23,
    }
    with pytest.raises(EmptyFastaError):
        summarize_fasta(empty_fasta)


def test_get_sequence_by_id(sample_fasta: Path) -> None:
    assert get_sequence_by_id(sample_fasta, "seq3") == {"id": "seq3", "description": "", "sequence": "ATGC"}
    with pytest.raises(SequenceNotFoundError, match="Sequence ID nope not found"):
        get_sequence_by_id(sample_fasta, "nope")


def test_filter(sample_fasta: Path) -> None:
    result = filter_fasta(sample_fasta, 5, 9)
    assert result["summary"]["matching_sequences"] == 1
    assert [item["id"] for item in result["matches"]] == ["seq1"]


def test_write_sequences(tmp_path: Path) -> None:
    out = tmp_path / "written.fasta"
    message = write_sequences(out, [{"id": "a", "description": "d", "sequence": "ACGT"}, {"id": "b", "sequence": "GG"}])
    assert message == f"Successfully wrote 2 sequences to {out}"
    assert out.read_text(encoding="utf-8") == ">a d\nACGT\n>b\nGG\n"
    with pytest.raises(ValueError):
        write_sequences(out, [{"id": "c"}])


def test_validate(sample_fasta: Path) -> None:
    result = validate_fasta(sample_fasta, "dna")
    assert result["summary"] == {"total_sequences": 3, "valid_sequences": 3, "invalid_sequences": 0}
    with pytest.raises(ValueError):
        validate_fasta(sample_fasta, "xna")


def test_validate_rejects_type_before_reading(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        validate_fasta(tmp_path / "missing.fasta", "xna")


def test_reverse_complement(sample_fasta: Path, tmp_path: Path) -> None:
    result = reverse_complement_fasta(sample_fasta, sequence_ids=["seq3"])
    assert result["processed_count"] == 1
    entry = result["sequences"][0]
    assert entry["id"] == "seq3_rc"
    assert entry["sequence"] == "GCAT"
    assert entry["description"] == "(reverse complement)"

    out = tmp_path / "rc.fasta"
    message = reverse_complement_fasta(sample_fasta, output_path=out)
    assert "3 reverse complement sequences" in message
    assert read_fasta(out)[0].description == "first record (reverse complement)"


def test_translate(sample_fasta: Path, tmp_path: Path) -> None:
    result = translate_fasta(TranslateRequest(path=sample_fasta, reading_frame=1))
    first = result["sequences"][0]
    assert first["id"] == "seq1_frame1"
    assert first["sequence"] == "MK*"
    assert first["stop_codons"] == 1
    assert first["description"] == "first record (translated frame 1)"

    out = tmp_path / "protein.fasta"
    message = translate_fasta(TranslateRequest(path=sample_fasta, reading_frame=1, output_path=out))
    assert message.startswith("Successfully translated 3 sequences")
    assert read_fasta(out)[0].sequence == "MK*"


def test_translate_invalid_frame_before_reading(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        translate_fasta(TranslateRequest(path=tmp_path / "missing.fasta", reading_frame=0))


def test_search(sample_fasta: Path) -> None:
    result = search_fasta(SearchRequest(path=sample_fasta, pattern="ATG", search_type="exact"))
    assert result["summary"] == {"total_sequences": 3, "sequences_with_matches": 2, "total_matches": 2}
    assert result["results"][0]["matches"][0]["position"] == 1


def test_search_bad_pattern_before_reading(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        search_fasta(SearchRequest(path=tmp_path / "missing.fasta", pattern="[", search_type="regex"))


def test_gc_content(sample_fasta: Path, empty_fasta: Path) -> None:
    result = gc_content(sample_fasta, window_size=5)
    assert result["window_size"] == 5
    assert result["overall_stats"]["total_sequences"] == 3
    assert set(result["overall_stats"]) == {"total_sequences", "mean_gc", "min_gc", "max_gc", "total_length"}
    seq2 = result["sequences"][1]
    assert seq2["gc_content"] == 80.0
    assert seq2["sliding_window_stats"]["number_of_windows"] == 6
    assert "sliding_window" not in result["sequences"][2]
    with pytest.raises(EmptyFastaError):
        gc_content(empty_fasta)


def test_split(sample_fasta: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "parts"
    result = split_fasta(SplitRequest(path=sample_fasta, split_by="count", output_dir=out_dir, value=2))
    assert result["summary"]["files_created"] == 2
    names = [Path(item["filename"]).name for item in result["files"]]
    assert names == ["split_part1.fasta", "split_part2.fasta"]
    assert [record.id for record in read_fasta(out_dir / "split_part2.fasta")] == ["seq3"]


def test_split_individual(sample_fasta: Path, tmp_path: Path) -> None:
    result = split_fasta(
        SplitRequest(path=sample_fasta, split_by="individual", output_dir=tmp_path / "one", prefix="rec")
    )
    assert sorted(p.name for p in (tmp_path / "one").iterdir()) == ["rec_seq1.fasta", "rec_seq2.fasta", "rec_seq3.fasta"]
    assert all(item["sequence_count"] == 1 for item in result["files"])


def test_merge(sample_fasta: Path, tmp_path: Path) -> None:
    out = tmp_path / "merged.fasta"
    result = merge_fasta_files(
        MergeRequest(
            input_paths=[sample_fasta, sample_fasta, tmp_path / "missing.fasta"],
            output_path=out,
            remove_duplicates=True,
        )
    )
    assert result["summary"]["total_sequences"] == 3
    assert result["summary"]["duplicates_removed"] == 3
    assert result["length_stats"] == {"mean": 7.67, "min": 4, "max": 10, "total": 23}
    assert "error" in result["file_details"][2]
    assert len(read_fasta(out)) == 3


def test_extract(sample_fasta: Path, tmp_path: Path) -> None:
    out = tmp_path / "extracted.fasta"
    result = extract_fasta(
        ExtractRequest(
            path=sample_fasta,
            coordinates=[
                {"sequence_id": "seq1", "start": 1, "end": 3},
                {"sequence_id": "seq2", "start": 0, "end": 3},
                {"sequence_id": "ghost", "start": 1, "end": 3},
            ],
            output_path=out,
        )
    )
    assert result["summary"]["successful_extractions"] == 1
    assert result["summary"]["errors"] == 2
    assert result["extracted_sequences"][0]["sequence"] == "ATG"
    assert result["errors"][1] == {"sequence_id": "ghost", "error": "Sequence not found"}
    assert read_fasta(out)[0].id == "seq1_1-3"


def test_extract_writes_nothing_when_all_fail(sample_fasta: Path, tmp_path: Path) -> None:
    out = tmp_path / "none.fasta"
    extract_fasta(
        ExtractRequest(path=sample_fasta, coordinates=[{"sequence_id": "seq3", "start": 2, "end": 9}], output_path=out)
    )
    assert not out.exists()


def test_find_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "dups.fasta"
    path.write_text(">a desc1\nATCG\n>b desc2\nATCG\n>c\nGGGG\n", encoding="utf-8")
    unique_out = tmp_path / "unique.fasta"
    dup_out = tmp_path / "dups_only.fasta"
    result = find_duplicates_fasta(
        DuplicatesRequest(
            path=path,
            duplicate_type="sequence",
            output_duplicates=dup_out,
            output_unique=unique_out,
        )
    )
    assert result["summary"]["duplicate_count"] == 2
    assert result["summary"]["unique_count"] == 2
    group = result["duplicates"][0]
    assert group["sequence_hash"] == "ATCG"
    assert group["indices"] == [0, 1]
    assert "type" not in group
    assert [record.id for record in read_fasta(unique_out)] == ["c", "a"]
    assert [record.id for record in read_fasta(dup_out)] == ["a", "b"]


def test_find_duplicates_both_tags_groups(tmp_path: Path) -> None:
    path = tmp_path / "dups.fasta"
    path.write_text(">a\nAAAA\n>a\nCCCC\n", encoding="utf-8")
    result = find_duplicates_fasta(DuplicatesRequest(path=path, duplicate_type="both"))
    assert result["duplicates"][0]["type"] == "id"
    assert result["duplicates"][0]["id"] == "a"


@pytest.mark.parametrize(
    "text",
    [
        ">a\nAAAA\n>a\nCCCC\n>a_2\nGGGG\n",
        ">x/y\nAAAA\n>x_y\nCCCC\n>x:y\nGGGG\n",
    ],
)
def test_split_individual_keeps_every_record_on_disk(tmp_path: Path, text: str) -> None:
    path = tmp_path / "ids.fasta"
    path.write_text(text, encoding="utf-8")
    out_dir = tmp_path / "each"
    result = split_fasta(SplitRequest(path=path, split_by="individual", output_dir=out_dir))

    files = sorted(out_dir.iterdir())
    assert len(files) == result["summary"]["files_created"] == 3
    sequences = sorted(record.sequence for file in files for record in read_fasta(file))
    assert sequences == ["AAAA", "CCCC", "GGGG"]


def test_find_duplicates_summary_counts_both_groupings(tmp_path: Path) -> None:
    path = tmp_path / "dups.fasta"
    path.write_text(">a\nAAAA\n>a\nCCCC\n>b\nGGGG\n>c\nGGGG\n", encoding="utf-8")
    result = find_duplicates_fasta(DuplicatesRequest(path=path, duplicate_type="sequence"))
    assert result["summary"]["duplicate_id_groups"] == 1
    assert result["summary"]["duplicate_sequence_groups"] == 1
    assert [group["sequence_hash"] for group in result["duplicates"]] == ["GGGG"]
