# src/lasclean/io/las_text.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from lasclean.errors import ParseError

# LAS null codes; compared numerically so "-999.250" also matches.
NULL_SENTINELS: Tuple[float, ...] = (-999.25, -999.0, 999.25)

# Upload cap carried over from the web front end.
MAX_LAS_BYTES = 100 * 1024 * 1024

SECTION_VERSION = "VERSION"
SECTION_WELL = "WELL"
SECTION_CURVE = "CURVE"
SECTION_PARAMETER = "PARAMETER"
SECTION_DATA = "DATA"
SECTION_OTHER = "OTHER"

_SECTION_BY_LETTER = {
    "V": SECTION_VERSION,
    "W": SECTION_WELL,
    "C": SECTION_CURVE,
    "P": SECTION_PARAMETER,
    "A": SECTION_DATA,
}


@dataclass(frozen=True)
class HeaderItem:
    unit: str
    description: str


@dataclass(frozen=True)
class Curve:
    mnemonic: str
    unit: str
    description: str
    # float64, NaN == missing
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def n_present(self) -> int:
        return int(np.count_nonzero(np.isfinite(self.values)))


@dataclass(frozen=True)
class LogDocument:
    version: Optional[HeaderItem]
    version_info: Dict[str, HeaderItem]
    well_info: Dict[str, HeaderItem]
    # ~C order; needed to align data columns positionally
    curves: Dict[str, Curve]
    # 1-based source line numbers of data rows dropped for a column-count mismatch
    skipped_rows: Tuple[int, ...] = ()

    @property
    def mnemonics(self) -> List[str]:
        return list(self.curves.keys())

    @property
    def n_rows(self) -> int:
        for c in self.curves.values():
            return len(c)
        return 0


@dataclass(frozen=True)
class ParseOutcome:
    ok: bool
    document: Optional[LogDocument] = None
    error: str = ""


def parse_value(token: str) -> float:
    """
    Convert one data token to a float; NaN marks a missing sample.

    Missing: unparseable tokens, non-finite values, and the LAS null sentinels.
    """
    try:
        v = float(token)
    except ValueError:
        return float("nan")
    if not np.isfinite(v) or v in NULL_SENTINELS:
        return float("nan")
    return v


def split_header_line(line: str) -> Optional[Tuple[str, str, str]]:
    """
    MNEMONIC.UNIT:DESCRIPTION -> (mnemonic, unit, description)

    Only the first '.' and the first ':' after it are delimiters. Returns None for
    lines without a '.' or with an empty mnemonic.
    """
    mnemonic, dot, rest = line.partition(".")
    if not dot:
        return None
    mnemonic = mnemonic.strip()
    if not mnemonic:
        return None
    unit, _, description = rest.partition(":")
    return mnemonic, unit.strip(), description.strip()


def _section_for(line: str) -> str:
    letter = line[1:2].upper()
    return _SECTION_BY_LETTER.get(letter, SECTION_OTHER)


def _unique_mnemonic(mnemonic: str, taken: Dict[str, object]) -> str:
    if mnemonic not in taken:
        return mnemonic
    k = 2
    while f"{mnemonic}:{k}" in taken:
        k += 1
    return f"{mnemonic}:{k}"


def _parse(text: str) -> LogDocument:
    section: Optional[str] = None
    in_data = False

    version_info: Dict[str, HeaderItem] = {}
    last_version: Optional[HeaderItem] = None
    well_info: Dict[str, HeaderItem] = {}
    curve_defs: Dict[str, HeaderItem] = {}
    columns: List[List[float]] = []
    skipped: List[int] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if in_data:
            tokens = line.split()
            if len(tokens) != len(columns):
                skipped.append(lineno)
                continue
            for col, tok in zip(columns, tokens):
                col.append(parse_value(tok))
            continue

        if line.startswith("~"):
            section = _section_for(line)
            if section == SECTION_DATA:
                in_data = True
            continue

        parts = split_header_line(line)
        if parts is None:
            continue
        mnemonic, unit, description = parts
        item = HeaderItem(unit=unit, description=description)

        if section == SECTION_VERSION:
            version_info[mnemonic] = item
            last_version = item
        elif section == SECTION_WELL:
            well_info[mnemonic] = item
        elif section == SECTION_CURVE:
            curve_defs[_unique_mnemonic(mnemonic, curve_defs)] = item
            columns.append([])

    if not curve_defs:
        raise ParseError("no curve data found")
    if not in_data:
        raise ParseError("no data section found")

    curves: Dict[str, Curve] = {}
    for (mnemonic, item), col in zip(curve_defs.items(), columns):
        curves[mnemonic] = Curve(
            mnemonic=mnemonic,
            unit=item.unit,
            description=item.description,
            values=np.asarray(col, dtype="float64"),
        )

    return LogDocument(
        version=version_info.get("VERS", last_version),
        version_info=version_info,
        well_info=well_info,
        curves=curves,
        skipped_rows=tuple(skipped),
    )


def parse_las_text(text: str) -> LogDocument:
    """
    Parse LAS-style text (~V/~W/~C/~P/~A sections) into a LogDocument.

    Raises ParseError when no curves are defined, when the data section is never
    reached, or when anything unexpected happens while parsing.
    """
    if not isinstance(text, str):
        raise ParseError(f"expected text, got {type(text).__name__}")
    try:
        return _parse(text)
    except ParseError:
        raise
    except Exception as e:
        raise ParseError(f"{type(e).__name__}: {e}") from e


# Boundary name used by the request-handling layer.
parse_document = parse_las_text


def try_parse_document(text: str) -> ParseOutcome:
    """Same as parse_document, but failures come back as a value instead of an exception."""
    try:
        return ParseOutcome(ok=True, document=parse_las_text(text))
    except ParseError as e:
        return ParseOutcome(ok=False, error=str(e))


def read_las_text(path: Path, *, max_bytes: int = MAX_LAS_BYTES) -> str:
    """
    Read a LAS file as text (UTF-8, BOM tolerated, undecodable bytes replaced).
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    size = p.stat().st_size
    if size > int(max_bytes):
        raise ParseError(f"file exceeds size limit ({size} > {int(max_bytes)} bytes): {p}")
    return p.read_bytes().decode("utf-8-sig", errors="replace")
