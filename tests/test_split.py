"""Tests for record splitting."""

from __future__ import annotations

import pytest

from fastakit.io.fasta import SequenceRecord
from fastakit.recordset.split import record_size, split_records

RECORDS = [SequenceRecord(f"s{i}", "", "ACGT" * 5) for i in range(5)]


def test_split_by_count() -> None:
    chunks = split_records(RECORDS, "count", 2)
    assert [chunk.name for chunk in chunks] == ["part1", "part2", "part3"]
    assert [len(chunk.records) for chunk in chunks] == [2, 2, 1]


def test_count_below_one_rejected() -> None:
    with pytest.raises(ValueError, match="positive"):
        split_records(RECORDS, "count", 0.5)


def test_split_by_size_packs_greedily() -> None:
    size = record_size(RECORDS[0])
    chunks = split_records(RECORDS, "size", (size * 2) / (1024 * 1024))
    assert [len(chunk.records) for chunk in chunks] == [2, 2, 1]


def test_oversized_record_gets_own_chunk() -> None:
    big = SequenceRecord("big", "", "A" * 500)
    chunks = split_records([big, RECORDS[0]], "size", 100 / (1024 * 1024))
    assert [[record.id for record in chunk.records] for chunk in chunks] == [["big"], ["s0"]]


def test_split_individual_names() -> None:
    records = [
        SequenceRecord("gene/1", "", "A"),
        SequenceRecord("gene/1", "", "C"),
        SequenceRecord("", "", "G"),
    ]
    chunks = split_records(records, "individual")
    assert [chunk.name for chunk in chunks] == ["gene_1", "gene_1_2", "3"]


def test_partition_preserves_order() -> None:
    for method, value in (("count", 3), ("size", 0.0001), ("individual", None)):
        chunks = split_records(RECORDS, method, value)
        assert [record for chunk in chunks for record in chunk.records] == RECORDS


def test_unknown_method() -> None:
    with pytest.raises(ValueError, match="Unknown split method"):
        split_records(RECORDS, "halves")


def test_generated_suffix_does_not_clash_with_real_id() -> None:
    records = [SequenceRecord("a", "", "AAAA"), SequenceRecord("a", "", "CCCC"), SequenceRecord("a_2", "", "GGGG")]
    names = [chunk.name for chunk in split_records(records, "individual")]
    assert names == ["a", "a_2", "a_2_2"]


def test_ids_sanitizing_to_same_name_stay_distinct() -> None:
    records = [SequenceRecord("x/y", "", "AAAA"), SequenceRecord("x_y", "", "CCCC")]
    names = [chunk.name for chunk in split_records(records, "individual")]
    assert names == ["x_y", "x_y_2"]
