"""Payroll workbook export.

Derived columns are written as live Excel formulas so that whoever receives
the sheet can audit the arithmetic.  A value an admin pinned by hand (for
example a negotiated DA) no longer matches its formula and is written as a
plain number instead.
"""
from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from typing import Any, Iterable, Mapping

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from payroll_desk.core.payroll import RATES, round_unit

COLUMNS: list[tuple[str, str]] = [
    ("employee_id", "Employee ID"),
    ("name", "Name"),
    ("designation", "Designation"),
    ("working_days", "Working Days"),
    ("reported_days", "Reported Days"),
    ("basic", "Basic"),
    ("special_pay", "Special Pay"),
    ("pay_scale", "Pay Scale"),
    ("da", "DA"),
    ("hra", "HRA"),
    ("gross_earning", "Gross Earning"),
    ("provident_fund", "PF"),
    ("professional", "Prof. Tax"),
    ("advance", "Advance"),
    ("tds", "TDS"),
    ("esic", "ESIC"),
    ("total_deductions", "Total Deductions"),
    ("net_pay", "Net Pay"),
    ("cpf", "CPF"),
    ("esic_contribution", "ESIC Contribution"),
    ("medical_contribution", "Medical Contribution"),
]

TEXT_FIELDS = {"employee_id", "name", "designation"}
LETTERS = {field: get_column_letter(index) for index, (field, _) in enumerate(COLUMNS, start=1)}


def _rate(key: str) -> str:
    return format(RATES[key].normalize(), "f")


def _number(value: Any) -> int | float:
    amount = Decimal(str(value or "0"))
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def _row_formulas(row: int) -> dict[str, str]:
    c = {field: f"{letter}{row}" for field, letter in LETTERS.items()}
    return {
        "pay_scale": f"=IF({c['reported_days']}=0,{c['basic']},ROUND({c['basic']}*{c['reported_days']}/{c['working_days']},0))",
        "da": f"=ROUND({c['pay_scale']}*{_rate('da_rate')},0)",
        "hra": f"=ROUND({c['pay_scale']}*{_rate('hra_rate')},0)",
        "gross_earning": f"={c['pay_scale']}+{c['special_pay']}+{c['da']}+{c['hra']}",
        "esic": f"=ROUND({c['gross_earning']}*{_rate('esic_rate')},0)",
        "total_deductions": (
            f"={c['provident_fund']}+{c['professional']}+{c['advance']}+{c['tds']}+{c['esic']}"
        ),
        "net_pay": f"={c['gross_earning']}-{c['total_deductions']}",
        "cpf": f"={c['provident_fund']}",
        "esic_contribution": f"=ROUND({c['gross_earning']}*{_rate('esic_contribution_rate')},0)",
    }


def _formula_matches(field: str, record: Mapping[str, Any]) -> bool:
    """Whether the stored value is what the formula would produce."""

    stored = Decimal(str(record.get(field) or "0"))
    pay_scale = Decimal(str(record.get("pay_scale") or "0"))
    gross = Decimal(str(record.get("gross_earning") or "0"))
    expected = {
        "da": lambda: round_unit(pay_scale * RATES["da_rate"]),
        "hra": lambda: round_unit(pay_scale * RATES["hra_rate"]),
        "esic": lambda: round_unit(gross * RATES["esic_rate"]),
        "esic_contribution": lambda: round_unit(gross * RATES["esic_contribution_rate"]),
    }
    if field not in expected:
        return True
    return stored == expected[field]()


def build_payroll_workbook(rows: Iterable[Mapping[str, Any]], month: str) -> Workbook:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Payroll"
    sheet.append([label for _, label in COLUMNS])
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = "A2"

    for index, record in enumerate(rows, start=2):
        formulas = _row_formulas(index)
        values: list[Any] = []
        for field, _ in COLUMNS:
            if field in TEXT_FIELDS:
                values.append(str(record.get(field, "")))
            elif field in formulas and _formula_matches(field, record):
                values.append(formulas[field])
            else:
                values.append(_number(record.get(field)))
        sheet.append(values)

    workbook.properties.title = f"Payroll {month}"
    return workbook


def export_payroll_workbook(rows: Iterable[Mapping[str, Any]], month: str) -> bytes:
    buffer = BytesIO()
    build_payroll_workbook(rows, month).save(buffer)
    return buffer.getvalue()
