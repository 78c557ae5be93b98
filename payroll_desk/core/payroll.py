"""Monthly payroll rules.

One canonical formula set turns a salary basis, an attendance count and the
admin's overrides into a :class:`PayrollBreakdown`.  Every monetary step is
rounded to a whole currency unit (half up) before it feeds the next one, so
totals match what the admins see on the payroll sheet.

Input handling is permissive: a missing or garbled number falls
back to the default listed in :data:`FIELD_DEFAULTS` instead of failing.  The
only hard requirement is the professional tax, which has no statutory default
and is checked by :func:`build_payroll_input`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from pathlib import Path
from typing import Any, Mapping

import yaml

from payroll_desk.core.schema import PayrollBreakdown
from payroll_desk.core.validation import MissingProfessionalTaxError

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

# Amounts outside 1e-15 .. 1e15 in magnitude are treated as garbage.
MAX_MAGNITUDE = 15
_CONTEXT = Context(prec=80, rounding=ROUND_HALF_UP)

_BUILTIN_RATES = {
    "default_working_days": 31,
    "da_rate": 0.25,
    "hra_rate": 0.20,
    "esic_rate": 0.0075,
    "esic_contribution_rate": 0.0325,
    "provident_fund": 1800,
}


def _load_rates() -> dict[str, Decimal]:
    path = CONFIG_DIR / "payroll_rates.yaml"
    loaded: dict = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as fp:
            loaded = yaml.safe_load(fp) or {}
    merged = {**_BUILTIN_RATES, **loaded}
    return {key: Decimal(str(value)) for key, value in merged.items()}


RATES = _load_rates()

# What each input falls back to when it is absent or not a number.
#   "computed" -> derived from the formula chain
#   "required" -> no fallback, see MissingProfessionalTaxError
FIELD_DEFAULTS: dict[str, object] = {
    "working_days": RATES["default_working_days"],
    "reported_days": Decimal("0"),
    "basic": Decimal("0"),
    "special_pay": Decimal("0"),
    "da": "computed",
    "hra": "computed",
    "esic": "computed",
    "esic_contribution": "computed",
    "provident_fund": RATES["provident_fund"],
    "professional": "required",
    "advance": Decimal("0"),
    "tds": Decimal("0"),
    "medical_contribution": Decimal("0"),
}

OVERRIDE_FIELDS = (
    "da",
    "hra",
    "esic",
    "esic_contribution",
    "provident_fund",
    "advance",
    "tds",
    "medical_contribution",
)


@dataclass(frozen=True)
class PayrollInput:
    """Parsed calculator input; ``None`` overrides mean "compute it"."""

    working_days: Decimal
    reported_days: Decimal
    basic: Decimal
    special_pay: Decimal
    professional: Decimal
    advance: Decimal = Decimal("0")
    tds: Decimal = Decimal("0")
    medical_contribution: Decimal = Decimal("0")
    provident_fund: Decimal | None = None
    da: Decimal | None = None
    hra: Decimal | None = None
    esic: Decimal | None = None
    esic_contribution: Decimal | None = None


def parse_amount(value: Any, default: Decimal | None = None) -> Decimal | None:
    """Read a number the way the payroll sheet does, or return ``default``.

    Strings are read up to the first non-numeric character, so ``"200 Rs"``
    gives 200 while ``"abc"`` gives the default.
    """

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if not match:
            return default
        try:
            result = Decimal(match.group(0))
        except InvalidOperation:
            return default
    if not result.is_finite():
        return default
    if result and abs(result.adjusted()) > MAX_MAGNITUDE:
        return default
    return result


def parse_override(value: Any) -> Decimal | None:
    """An override counts only when it parses to a non-zero number."""

    result = parse_amount(value)
    if result is None or result == 0:
        return None
    return result


def build_payroll_input(raw: Mapping[str, Any], *, default_professional: Any = None) -> PayrollInput:
    """Apply the default table to a loosely typed payload."""

    working_days = parse_override(raw.get("working_days"))
    if working_days is None or working_days < 0:
        working_days = RATES["default_working_days"]

    professional = parse_amount(raw.get("professional"))
    if professional is None:
        professional = parse_amount(default_professional)
    if professional is None:
        raise MissingProfessionalTaxError("professional tax is required")

    values: dict[str, Decimal | None] = {}
    for field in OVERRIDE_FIELDS:
        default = FIELD_DEFAULTS[field]
        override = parse_override(raw.get(field))
        if override is None and isinstance(default, Decimal):
            override = default
        values[field] = override
    for field in ("reported_days", "basic", "special_pay"):
        values[field] = parse_amount(raw.get(field), FIELD_DEFAULTS[field])

    return PayrollInput(working_days=working_days, professional=professional, **values)


def round_unit(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP, context=_CONTEXT)


def to_text(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def calculate_payroll(data: PayrollInput, *, employee_id: str, month: str) -> PayrollBreakdown:
    with localcontext(_CONTEXT):
        if data.reported_days == 0:
            pay_scale = data.basic
        else:
            pay_scale = round_unit(data.basic * data.reported_days / data.working_days)

        da = data.da if data.da is not None else round_unit(pay_scale * RATES["da_rate"])
        hra = data.hra if data.hra is not None else round_unit(pay_scale * RATES["hra_rate"])
        gross = pay_scale + data.special_pay + da + hra

        provident_fund = data.provident_fund if data.provident_fund is not None else RATES["provident_fund"]
        esic = data.esic if data.esic is not None else round_unit(gross * RATES["esic_rate"])
        total_deductions = provident_fund + data.professional + data.advance + data.tds + esic
        net_pay = gross - total_deductions

        if data.esic_contribution is not None:
            esic_contribution = data.esic_contribution
        else:
            esic_contribution = round_unit(gross * RATES["esic_contribution_rate"])

        return PayrollBreakdown(
            employee_id=employee_id,
            month=month,
            working_days=to_text(data.working_days),
            reported_days=to_text(data.reported_days),
            basic=to_text(data.basic),
            special_pay=to_text(data.special_pay),
            pay_scale=to_text(pay_scale),
            da=to_text(da),
            hra=to_text(hra),
            gross_earning=to_text(gross),
            provident_fund=to_text(provident_fund),
            professional=to_text(data.professional),
            advance=to_text(data.advance),
            tds=to_text(data.tds),
            esic=to_text(esic),
            total_deductions=to_text(total_deductions),
            net_pay=to_text(net_pay),
            cpf=to_text(provident_fund),
            esic_contribution=to_text(esic_contribution),
            medical_contribution=to_text(data.medical_contribution),
        )


def compute_breakdown(
    raw: Mapping[str, Any],
    *,
    employee_id: str,
    month: str,
    default_professional: Any = None,
) -> PayrollBreakdown:
    """Parse ``raw`` and run the calculator in one step."""

    data = build_payroll_input(raw, default_professional=default_professional)
    return calculate_payroll(data, employee_id=employee_id, month=month)
