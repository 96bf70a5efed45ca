from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from lasclean.errors import ParseError
from lasclean.io.las_text import (
    parse_las_text,
    parse_value,
    read_las_text,
    split_header_line,
    try_parse_document,
)

SAMPLE = "\n".join(
    [
        "~VERSION INFORMATION",
        " VERS.   2.0 : CWLS LOG ASCII STANDARD - VERSION 2.0",
        " WRAP.   NO  : ONE LINE PER DEPTH STEP",
        "~WELL INFORMATION",
        "#MNEM.UNIT  DATA  : DESCRIPTION",
        " STRT.M    1000.0 : START DEPTH",
        " WELL.     ANY WELL : WELL NAME: PRIMARY",
        "~CURVE INFORMATION",
        " DEPT.M     : 1  DEPTH",
        " GR.API     : 2  GAMMA RAY",
        " RHOB.G/CC  : 3  BULK DENSITY",
        "~PARAMETER",
        " BHT.DEGC  35.0 : BOTTOM HOLE TEMP",
        "~A  DEPTH  GR  RHOB",
        "1000.0  50.0  2.45",
        "1000.5  -999.25  2.50",
        "1001.0  55.0  abc",
        "1001.5  60.0",
        "",
        "# comment",
        "1002.0  999.25  -999",
    ]
)


def test_parse_sections_and_curves() -> None:
    doc = parse_las_text(SAMPLE)

    assert doc.version is not None
    assert doc.version.unit == "2.0"
    assert doc.version.description == "CWLS LOG ASCII STANDARD - VERSION 2.0"
    assert list(doc.version_info.keys()) == ["VERS", "WRAP"]

    assert list(doc.well_info.keys()) == ["STRT", "WELL"]
    assert doc.well_info["WELL"].unit == "ANY WELL"
    # only the first ':' splits
    assert doc.well_info["WELL"].description == "WELL NAME: PRIMARY"
    assert "BHT" not in doc.well_info

    assert doc.mnemonics == ["DEPT", "GR", "RHOB"]
    assert doc.curves["GR"].unit == "API"
    assert doc.curves["RHOB"].unit == "G/CC"
    assert doc.curves["RHOB"].description == "3  BULK DENSITY"


def test_parse_data_rows_and_nulls() -> None:
    doc = parse_las_text(SAMPLE)

    np.testing.assert_allclose(doc.curves["DEPT"].values, [1000.0, 1000.5, 1001.0, 1002.0])
    np.testing.assert_allclose(doc.curves["GR"].values, [50.0, np.nan, 55.0, np.nan])
    np.testing.assert_allclose(doc.curves["RHOB"].values, [2.45, 2.50, np.nan, np.nan])
    assert doc.n_rows == 4
    assert doc.curves["GR"].n_present == 2
    assert {len(c) for c in doc.curves.values()} == {4}


def test_skipped_rows_report_line_numbers() -> None:
    doc = parse_las_text(SAMPLE)
    assert doc.skipped_rows == (18,)


def test_parse_value_sentinels_and_garbage() -> None:
    for tok in ["-999.25", "-999", "999.25", "-999.250", "-999.0", "abc", "", "nan", "inf", "1.2.3"]:
        assert np.isnan(parse_value(tok)), tok
    for tok, expected in [("0", 0.0), ("-999.5", -999.5), ("999.24", 999.24), ("1e3", 1000.0), ("-0.25", -0.25)]:
        assert parse_value(tok) == expected


def test_split_header_line() -> None:
    assert split_header_line("DEPT.M : Depth") == ("DEPT", "M", "Depth")
    assert split_header_line("GR. : a:b:c") == ("GR", "", "a:b:c")
    assert split_header_line("TIME.MS 1.5 : two.dots") == ("TIME", "MS 1.5", "two.dots")
    assert split_header_line("no dot here : x") is None
    assert split_header_line(".M : empty mnemonic") is None


def test_duplicate_curve_mnemonics_keep_alignment() -> None:
    text = "\n".join(["~C", "DEPT.M : d", "GR.API : a", "GR.API : b", "~A", "1 10 20", "2 11 21"])
    doc = parse_las_text(text)
    assert doc.mnemonics == ["DEPT", "GR", "GR:2"]
    np.testing.assert_allclose(doc.curves["GR"].values, [10, 11])
    np.testing.assert_allclose(doc.curves["GR:2"].values, [20, 21])


def test_section_letters_case_insensitive_and_unknown_sections_ignored() -> None:
    text = "\n".join(["~curve", "DEPT.M : d", "~Other information", "NOTE.X : ignored", "~ascii", "1", "2"])
    doc = parse_las_text(text)
    assert doc.mnemonics == ["DEPT"]
    np.testing.assert_allclose(doc.curves["DEPT"].values, [1, 2])


def test_lines_after_data_marker_are_data() -> None:
    text = "\n".join(["~C", "A.M : a", "B.M : b", "~A", "1 2", "~W", "X.M : not a header", "3 4"])
    doc = parse_las_text(text)
    np.testing.assert_allclose(doc.curves["A"].values, [1, 3])
    assert doc.skipped_rows == (6, 7)
    assert doc.well_info == {}


def test_windows_line_endings() -> None:
    doc = parse_las_text(SAMPLE.replace("\n", "\r\n"))
    assert doc.n_rows == 4


def test_no_curves_is_parse_error() -> None:
    text = "\n".join(["~V", "VERS. 2.0 : v", "~C", "~A", "1 2 3"])
    with pytest.raises(ParseError, match="no curve data found"):
        parse_las_text(text)


def test_missing_data_section_is_parse_error() -> None:
    text = "\n".join(["~C", "DEPT.M : d", "GR.API : g"])
    with pytest.raises(ParseError, match="no data section"):
        parse_las_text(text)


def test_empty_text_and_non_text() -> None:
    with pytest.raises(ParseError):
        parse_las_text("")
    with pytest.raises(ParseError):
        parse_las_text(b"~C\nA.M : a\n~A\n1\n")  # type: ignore[arg-type]


def test_try_parse_document_returns_value() -> None:
    bad = try_parse_document("just some text")
    assert not bad.ok
    assert bad.document is None
    assert "no curve data found" in bad.error

    good = try_parse_document(SAMPLE)
    assert good.ok
    assert good.document is not None
    assert good.error == ""


def test_reparse_is_stable(make_las) -> None:
    doc = parse_las_text(SAMPLE)
    cols = {mn: c.values for mn, c in doc.curves.items()}
    doc2 = parse_las_text(make_las(cols))

    assert doc2.mnemonics == doc.mnemonics
    for mn in doc.mnemonics:
        a = doc.curves[mn].values
        b = doc2.curves[mn].values
        assert a.size == b.size
        np.testing.assert_array_equal(np.isnan(a), np.isnan(b))
        np.testing.assert_allclose(a[~np.isnan(a)], b[~np.isnan(b)])


def test_read_las_text(tmp_path: Path) -> None:
    p = tmp_path / "sample.las"
    p.write_bytes(b"\xef\xbb\xbf" + SAMPLE.encode("utf-8"))
    text = read_las_text(p)
    assert text.startswith("~VERSION")
    assert parse_las_text(text).n_rows == 4

    with pytest.raises(ParseError, match="size limit"):
        read_las_text(p, max_bytes=10)

    with pytest.raises(FileNotFoundError):
        read_las_text(tmp_path / "missing.las")
