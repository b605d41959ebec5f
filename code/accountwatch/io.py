import os
from collections import deque
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import pandas as pd
from dotenv import load_dotenv

from .config import build_settings, Settings, REPORTED_LIMIT, FOLLOWERS_COUNT_LIMIT
from .records import InvalidRecord

CHUNK_ROWS = 10_000

# stands in for an over-long row until it is reached in row order
_TOO_LONG = "\x00too long\x00"

def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value

def load_settings(kind, base_dir: Optional[str] = None) -> Settings:
    load_dotenv()
    env_name = f"ACCOUNTWATCH_{kind.name.upper().replace('-', '_')}_DIR"
    base_dir = base_dir or os.getenv(env_name) or kind.default_base
    return build_settings(
        base_dir,
        reported_limit=_env_int("ACCOUNTWATCH_REPORTED_LIMIT", REPORTED_LIMIT),
        followers_count_limit=_env_int("ACCOUNTWATCH_FOLLOWERS_LIMIT", FOLLOWERS_COUNT_LIMIT),
    )

def _present(values) -> List[str]:
    """Drop the trailing missing values pandas pads short rows with."""
    fields = list(values)
    while fields and not isinstance(fields[-1], str):
        fields.pop()
    return fields

def _first_row(path: Path) -> List[str]:
    first = pd.read_csv(
        path,
        header=None,
        nrows=1,
        dtype=str,
        keep_default_na=False,
        engine="python",
        skip_blank_lines=False,
    )
    return _present(first.iloc[0].tolist())

def read_rows(path: Path, width: int, label: str = "record") -> Iterator[Tuple[int, List[str]]]:
    """
    Stream the header-less CSV at `path` as (row number, fields) pairs.

    Fields are kept as text and every record counts towards the row number, blank ones
    included. Rows shorter than `width` come back short (the padding pandas adds is
    stripped), empty records are skipped, and the first row longer than `width` raises
    InvalidRecord when iteration reaches it.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    if Path(path).stat().st_size == 0:
        return

    too_long = deque()

    def hold_too_long(bad_line: List[str]) -> List[str]:
        too_long.append(list(bad_line))
        return [_TOO_LONG] * width

    chunks = pd.read_csv(
        path,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        engine="python",
        on_bad_lines=hold_too_long,
        chunksize=CHUNK_ROWS,
    )
    row_number = 0
    for chunk in chunks:
        if not isinstance(chunk.index, pd.RangeIndex):
            # pandas reads the surplus fields of an over-long first row as an index
            raise InvalidRecord(_first_row(path), label, line=1)
        for values in chunk.itertuples(index=False, name=None):
            row_number += 1
            if too_long and values[0] == _TOO_LONG:
                raise InvalidRecord(too_long.popleft(), label, line=row_number)
            fields = _present(values)
            if fields:
                yield row_number, fields

def load_items(kind, settings: Settings) -> Iterator:
    """Parse data.csv row by row for `kind`, stopping at the first invalid row."""
    label = f"{kind.name.replace('-', ' ')} record"
    for line, row in read_rows(settings.input_csv, kind.width, label):
        try:
            yield kind.parse_row(row)
        except InvalidRecord as exc:
            raise exc.at_line(line) from None
