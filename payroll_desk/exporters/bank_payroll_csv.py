from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

BANK_COLUMNS = ["employee_id", "name", "amount", "period"]


def bank_payroll_frame(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    records = []
    for row in rows:
        records.append({
            "employee_id": row["employee_id"],
            "name": row.get("name", ""),
            "amount": row["net_pay"],
            "period": row["month"],
        })
    return pd.DataFrame(records, columns=BANK_COLUMNS)


def render_bank_payroll(rows: Iterable[Mapping[str, Any]]) -> str:
    return bank_payroll_frame(rows).to_csv(index=False)


def export_bank_payroll(path: Path, rows: Iterable[Mapping[str, Any]]) -> Path:
    df = bank_payroll_frame(rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
