"""Pydantic models describing the calculation request and response payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

__all__ = [
    "InsuranceBaseInput",
    "CalculationRequest",
    "TaxBreakdownEntry",
    "InsuranceSummary",
    "RegimeResult",
    "SalaryDifference",
    "ResponseMeta",
    "ComparisonResponse",
    "format_validation_error",
]


class InsuranceBaseInput(BaseModel):
    """Insurance base selection supplied by the caller."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    type: Literal["basic", "specific", "percentage"] = "basic"
    value: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _validate_value(self) -> "InsuranceBaseInput":
        if self.type != "basic" and self.value is None:
            raise ValueError(f"a value is required for the '{self.type}' insurance base")
        if self.type == "percentage" and self.value is not None and self.value > 100:
            raise ValueError("insurance base percentage cannot exceed 100")
        return self


class CalculationRequest(BaseModel):
    """Salary input compared across the configured regimes."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    salary_type: Literal["gross", "net"] = "gross"
    salary: float = Field(..., ge=0)
    dependents: int = Field(default=0, ge=0, le=50)
    insurance_base: InsuranceBaseInput = Field(default_factory=InsuranceBaseInput)


class TaxBreakdownEntry(BaseModel):
    """Tax attributed to a single progressive bracket."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    lower_bound: float = Field(alias="from")
    upper_bound: float | None = Field(default=None, alias="to")
    rate: float
    formatted_rate: str
    taxable_amount: float
    tax_amount: float


class InsuranceSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    base_amount: float
    employee_contribution: float
    employer_contribution: float
    total_contribution: float


class RegimeResult(BaseModel):
    """Full calculation outcome under one regime."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    regime: str
    label: str
    salary_type: Literal["gross", "net"]
    dependents: int
    gross_salary: float
    net_salary: float
    taxable_income: float
    total_tax: float
    insurance: InsuranceSummary
    tax_breakdown: list[TaxBreakdownEntry]
    total_employer_cost: float


class SalaryDifference(BaseModel):
    """Comparison regime minus baseline regime, field by field."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    gross_salary: float
    net_salary: float
    taxable_income: float
    total_tax: float
    employee_insurance: float
    total_employer_cost: float


class ResponseMeta(BaseModel):
    """Metadata returned alongside the comparison output."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    baseline: str
    comparison: str
    salary_type: Literal["gross", "net"]
    dependents: int
    insurance_base: InsuranceBaseInput
    version: str | None = None


class ComparisonResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    results: dict[str, RegimeResult]
    difference: SalaryDifference
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
