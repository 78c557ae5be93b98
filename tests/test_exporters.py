from __future__ import annotations

from io import BytesIO, StringIO

import pandas as pd
from openpyxl import load_workbook

from payroll_desk.core.payroll import compute_breakdown
from payroll_desk.exporters.bank_payroll_csv import BANK_COLUMNS, export_bank_payroll, render_bank_payroll
from payroll_desk.exporters.payroll_xlsx import COLUMNS, export_payroll_workbook


def _row(employee_id: str = "EMP001", **changes) -> dict:
    raw = {
        "basic": "31000",
        "special_pay": "5000",
        "working_days": "31",
        "reported_days": "15",
        "professional": "200",
        **changes,
    }
    breakdown = compute_breakdown(raw, employee_id=employee_id, month="01-2025").model_dump(exclude={"created_at"})
    return {"name": "Asha Rao", "designation": "Sales Manager", **breakdown}


def _load(rows):
    workbook = load_workbook(BytesIO(export_payroll_workbook(rows, "01-2025")))
    return workbook["Payroll"]


def test_workbook_header_and_inputs():
    sheet = _load([_row()])

    assert [cell.value for cell in sheet[1]] == [label for _, label in COLUMNS]
    assert sheet.freeze_panes == "A2"
    assert sheet["A2"].value == "EMP001"
    assert sheet["B2"].value == "Asha Rao"
    assert sheet["D2"].value == 31
    assert sheet["E2"].value == 15
    assert sheet["F2"].value == 31000
    assert sheet["M2"].value == 200


def test_workbook_writes_live_formulas():
    sheet = _load([_row(), _row("EMP002")])

    assert sheet["H2"].value == "=IF(E2=0,F2,ROUND(F2*E2/D2,0))"
    assert sheet["I2"].value == "=ROUND(H2*0.25,0)"
    assert sheet["J2"].value == "=ROUND(H2*0.2,0)"
    assert sheet["K2"].value == "=H2+G2+I2+J2"
    assert sheet["P2"].value == "=ROUND(K2*0.0075,0)"
    assert sheet["Q2"].value == "=L2+M2+N2+O2+P2"
    assert sheet["R2"].value == "=K2-Q2"
    assert sheet["S2"].value == "=L2"
    assert sheet["T2"].value == "=ROUND(K2*0.0325,0)"
    assert sheet["R3"].value == "=K3-Q3"


def test_pinned_values_are_written_as_numbers():
    sheet = _load([_row(da="9000", esic_contribution="777")])

    assert sheet["I2"].value == 9000
    assert sheet["T2"].value == 777
    assert sheet["J2"].value == "=ROUND(H2*0.2,0)"
    assert sheet["K2"].value == "=H2+G2+I2+J2"


def test_bank_csv_lists_net_pay():
    frame = pd.read_csv(StringIO(render_bank_payroll([_row(), _row("EMP002", reported_days="0")])))

    assert list(frame.columns) == BANK_COLUMNS
    assert frame["employee_id"].tolist() == ["EMP001", "EMP002"]
    assert frame["amount"].tolist() == [24549, 47575]
    assert frame["period"].tolist() == ["01-2025", "01-2025"]


def test_bank_csv_written_to_disk(tmp_path):
    path = export_bank_payroll(tmp_path / "exports" / "bank.csv", [_row()])

    assert path.exists()
    assert path.read_text(encoding="utf-8").splitlines()[0] == ",".join(BANK_COLUMNS)
