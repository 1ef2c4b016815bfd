import csv
import io
import json
import math
from typing import Any, Dict, List, Union

from datatransform.models import OutputFormat

UTF8_BOM = "\ufeff"

_SCALARS = (str, int, float)


def to_json_bytes(records: List[Dict[str, Any]], indent: int = 2) -> bytes:
    """Pretty-printed JSON array, UTF-8, non-ASCII kept readable.

    NaN and infinities become null so the output stays valid JSON.

    Raises:
        TypeError: a value is not JSON-serializable
    """
    return json.dumps(_finite(records), indent=indent, ensure_ascii=False, allow_nan=False).encode("utf-8")


def to_csv_bytes(records: List[Dict[str, Any]], bom: bool = True) -> bytes:
    """Flat CSV with a header inferred from the records.

    The header is the union of keys in first-seen order, so records with
    extra pass-through keys lose nothing. Nested values are JSON-encoded
    in their cell. The BOM lets spreadsheet tools pick UTF-8.

    Raises:
        TypeError: a value is not JSON-serializable
    """
    header: Dict[str, None] = {}
    for record in records:
        for key in record:
            header.setdefault(key, None)
    columns = list(header)

    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, lineterminator="\r\n")
    if columns:
        writer.writerow(columns)
    for record in records:
        writer.writerow([_cell(record.get(column)) for column in columns])

    text = buffer.getvalue()
    if bom:
        text = UTF8_BOM + text
    return text.encode("utf-8")


def serialize(
    records: List[Dict[str, Any]],
    fmt: Union[OutputFormat, str],
    json_indent: int = 2,
    csv_bom: bool = True
) -> bytes:
    if OutputFormat(fmt) == OutputFormat.CSV:
        return to_csv_bytes(records, bom=csv_bom)
    return to_json_bytes(records, indent=json_indent)


def _finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def _cell(value: Any) -> str:
    value = _finite(value)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _SCALARS):
        return str(value)
    return json.dumps(value, ensure_ascii=False, allow_nan=False)
