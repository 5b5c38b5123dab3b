"""CSV import/export of client contracts"""

import csv
import io
import math
import re
from datetime import date
from typing import Dict, Iterable, List, Optional

from aqsati.domain.exceptions import CsvImportError
from aqsati.domain.models import Client, ClientDraft
from aqsati.utils.date_utils import parse_date

CSV_HEADERS = ["name", "phone", "total", "months", "startDate"]

# Byte order mark expected by spreadsheet tools
UTF8_BOM = "\ufeff"


def export_filename(today: date) -> str:
    return f"Aqsati_Clients_Export_{today.isoformat()}.csv"


def _format_amount(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def export_clients_csv(clients: Iterable[Client]) -> str:
    """Serialize clients to CSV text with a UTF-8 BOM prefix"""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_HEADERS, lineterminator="\n")
    writer.writeheader()
    for client in clients:
        writer.writerow(
            {
                "name": client.name,
                "phone": client.phone,
                "total": _format_amount(client.total),
                "months": client.months,
                "startDate": client.start_date,
            }
        )
    return UTF8_BOM + output.getvalue()


def _parse_row(row: Dict[str, Optional[str]], phone_regex: re.Pattern) -> ClientDraft:
    """Validate a single CSV row, raising ValueError with a readable reason"""
    values = {key: (row.get(key) or "").strip() for key in CSV_HEADERS}
    if not all(values.values()):
        raise ValueError("missing or empty fields")

    if not phone_regex.match(values["phone"]):
        raise ValueError(f"invalid phone number '{values['phone']}'")

    try:
        total = float(values["total"])
    except ValueError:
        raise ValueError(f"total '{values['total']}' is not a number")
    if not math.isfinite(total) or total <= 0:
        raise ValueError("total must be a positive number")

    try:
        months = int(values["months"])
    except ValueError:
        raise ValueError(f"months '{values['months']}' is not a whole number")
    if months <= 0:
        raise ValueError("months must be a positive whole number")

    start = parse_date(values["startDate"])
    if start is None:
        raise ValueError(f"invalid date '{values['startDate']}' (expected YYYY-MM-DD)")

    return ClientDraft(
        name=values["name"],
        phone=values["phone"],
        total=total,
        months=months,
        start_date=start.isoformat(),
    )


def parse_clients_csv(text: str, phone_pattern: str) -> List[ClientDraft]:
    """
    Parse and validate a client CSV file.

    All-or-nothing: a missing column or any invalid row raises
    CsvImportError listing every problem. Row numbers are line numbers
    in the file, the header being row 1; blank lines are skipped but
    still counted.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip(UTF8_BOM)))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames

    missing = [h for h in CSV_HEADERS if h not in fieldnames]
    if missing:
        raise CsvImportError(f"Missing required columns: {', '.join(missing)}")

    phone_regex = re.compile(phone_pattern)
    drafts: List[ClientDraft] = []
    errors: List[str] = []

    for row in reader:
        try:
            drafts.append(_parse_row(row, phone_regex))
        except ValueError as e:
            errors.append(f"Row {reader.line_num}: {e}")

    if errors:
        raise CsvImportError("CSV contains invalid rows", errors)
    if not drafts:
        raise CsvImportError("CSV file contains no client rows")

    return drafts
