from __future__ import annotations

from ct_stowage.services.block_parser import parse_blocks


def _assert_partition(structure, total_rows: int) -> None:
    blocks = structure.blocks
    for a, b in zip(blocks, blocks[1:]):
        assert a.end == b.start
    if blocks:
        assert blocks[0].start == len(structure.header_rows)
        assert blocks[-1].end + len(structure.tail_rows) == total_rows


def test_header_blocks_and_partition(report_rows):
    structure = parse_blocks(report_rows)
    assert len(structure.header_rows) == 2
    assert [(b.id, b.start, b.end) for b in structure.blocks] == [
        ("MSKU1111111", 2, 5),
        ("TGHU2222222", 5, 8),
        ("ZZZU9999999", 8, 11),
    ]
    assert structure.tail_rows == []
    _assert_partition(structure, len(report_rows))


def test_rows_are_covered_in_order(report_rows):
    structure = parse_blocks(report_rows)
    rebuilt = list(structure.header_rows)
    for b in structure.blocks:
        rebuilt.extend(report_rows[b.start:b.end])
    rebuilt.extend(structure.tail_rows)
    assert rebuilt == report_rows


def test_no_container_rows_means_all_header():
    rows = [["TITLE"], [], ["(1) SUPPLY", -18.0]]
    structure = parse_blocks(rows)
    assert structure.header_rows == rows
    assert structure.blocks == []
    assert structure.tail_rows == []


def test_empty_grid():
    structure = parse_blocks([])
    assert structure.header_rows == []
    assert structure.blocks == []
    assert structure.tail_rows == []


def test_id_in_any_column_and_single_row_blocks():
    rows = [
        ["", "", "abcd1234567"],
        ["EFGH7654321"],
        [None, "IJKL1111111", "MNOP2222222"],
        [],
        ["footer note"],
    ]
    structure = parse_blocks(rows)
    assert structure.header_rows == []
    assert [(b.id, b.start, b.end) for b in structure.blocks] == [
        ("ABCD1234567", 0, 1),
        ("EFGH7654321", 1, 2),
        ("IJKL1111111", 2, 5),  # first validating cell of the row is the block id
    ]
    _assert_partition(structure, len(rows))


def test_duplicate_containers_are_separate_blocks():
    rows = [["ABCD1234567"], ["x"], ["ABCD1234567"], ["y"]]
    structure = parse_blocks(rows)
    assert [b.id for b in structure.blocks] == ["ABCD1234567", "ABCD1234567"]
    assert [b.row_count for b in structure.blocks] == [2, 2]
