import io
from typing import List, Optional, Sequence

import pandas as pd
from loguru import logger

from hand_tracker.errors import MalformedInputError
from hand_tracker.models import LogRecord
from hand_tracker.patterns import RE_END, RE_START

# Admin announcements and table-config banners; "*" marks platform system messages.
DEFAULT_NOISE_PREFIXES = ("The admin", "IMPORTANT:", "WARNING:", "*")


def is_noise(entry: str, noise_prefixes: Sequence[str] = DEFAULT_NOISE_PREFIXES) -> bool:
    entry = entry.strip()
    if not entry:
        return True
    return any(entry.startswith(p) for p in noise_prefixes)


def should_reverse(records: List[LogRecord]) -> bool:
    """
    Detect a newest-first export when there is no `order` column to sort by.
    Hand numbers only grow during a session, so start markers that count down
    mean the file is reversed. With a single hand, an end marker ahead of the
    first start marker gives it away.
    """
    numbers = []
    first_start = None
    first_end = None
    for i, rec in enumerate(records):
        ms = RE_START.search(rec.entry)
        if ms:
            numbers.append(int(ms.group("hn")))
            if first_start is None:
                first_start = i
        elif first_end is None and RE_END.search(rec.entry):
            first_end = i

    if len(numbers) >= 2 and numbers[0] != numbers[-1]:
        return numbers[0] > numbers[-1]
    return first_end is not None and (first_start is None or first_end < first_start)


def _skip_bad_line(fields: List[str]) -> None:
    logger.warning(f"Skipping malformed log row with {len(fields)} fields: {fields!r}")
    return None


def _to_sequence(value) -> Optional[int]:
    if pd.isna(value):
        return None
    return int(value)


def read_log_records(
    csv_text: str,
    entry_col: str = "entry",
    order_col: str = "order",
    at_col: str = "at",
    noise_prefixes: Sequence[str] = DEFAULT_NOISE_PREFIXES,
) -> List[LogRecord]:
    """
    Parse the raw CSV export into LogRecords sorted by the numeric `order` column.

    Empty input and a header-only file both give an empty list. Rows that do
    not fit the header are dropped with a warning. A missing `entry` column
    raises MalformedInputError.
    """
    if not csv_text or not csv_text.strip():
        return []
    csv_text = csv_text.lstrip("\ufeff")

    try:
        raw = pd.read_csv(
            io.StringIO(csv_text),
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.EmptyDataError:
        return []

    if entry_col not in raw.columns:
        raise MalformedInputError(
            f"entry_col='{entry_col}' not found in columns: {raw.columns.tolist()}"
        )

    # short rows are padded with NaN
    raw = raw.fillna("")
    df = pd.DataFrame({"entry": raw[entry_col].astype(str)})
    df["at"] = raw[at_col].astype(str) if at_col in raw.columns else ""

    has_order = order_col in raw.columns
    if has_order:
        df["order"] = pd.to_numeric(raw[order_col].str.strip(), errors="coerce")
        # stable so that equal order values keep file order
        df = df.sort_values("order", kind="mergesort", na_position="last")
    else:
        df["order"] = float("nan")

    keep = df["entry"].map(lambda e: not is_noise(e, noise_prefixes)).astype(bool)
    df = df.loc[keep]

    records = [
        LogRecord(sequence=_to_sequence(order), timestamp=at, entry=entry.strip())
        for entry, at, order in df[["entry", "at", "order"]].itertuples(index=False)
    ]
    if not has_order and should_reverse(records):
        records.reverse()
    return records
