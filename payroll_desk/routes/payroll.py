from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response

from payroll_desk.application import Services
from payroll_desk.exporters.bank_payroll_csv import render_bank_payroll
from payroll_desk.exporters.payroll_xlsx import export_payroll_workbook
from payroll_desk.routes.deps import domain_errors, get_services, require_admin

router = APIRouter(prefix="/payroll", tags=["payroll"], dependencies=[Depends(require_admin)])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.delete("")
async def purge_old_payrolls(
    older_than_months: int = Query(...),
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        return services.payroll.purge_older_than(older_than_months)


@router.get("/{month}")
async def month_sheet(month: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        rows = services.payroll.month_sheet(month)
    return {"month": month, "items": rows}


@router.get("/{month}/saved")
async def saved_payrolls(month: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        rows = services.payroll.saved_for_month(month)
    return {"month": month, "items": rows}


@router.post("/{month}/employees/{employee_id}/calculate")
async def preview_payroll(
    month: str,
    employee_id: str,
    payload: dict | None = Body(default=None),
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        return services.payroll.preview(employee_id, month, payload)


@router.put("/{month}/employees/{employee_id}")
async def save_payroll(
    month: str,
    employee_id: str,
    payload: dict | None = Body(default=None),
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        return services.payroll.save(employee_id, month, payload)


@router.post("/{month}/save-all")
async def save_all_payrolls(month: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        return services.payroll.save_all(month)


@router.get("/{month}/export.xlsx")
async def export_workbook(month: str, services: Services = Depends(get_services)) -> Response:
    with domain_errors():
        rows = services.payroll.export_rows(month)
    return Response(
        content=export_payroll_workbook(rows, month),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="Payroll_{month}.xlsx"'},
    )


@router.get("/{month}/export/bank.csv")
async def export_bank_csv(month: str, services: Services = Depends(get_services)) -> Response:
    with domain_errors():
        rows = services.payroll.export_rows(month)
    return Response(
        content=render_bank_payroll(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="bank_payroll_{month}.csv"'},
    )
