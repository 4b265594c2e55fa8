"""
Invoice record schema: the single source of truth for the fields requested from
the LLM, how its response is validated, and the CSV column order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

FILE_NAME_COLUMN = "fileName"

_FORBIDDEN_INVOICE_NUMBER_CHARS = ("#", "*", "\\x")


class InvoiceRecord(BaseModel):
    """Fields extracted from one invoice. Declaration order is the output column order."""
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True, allow_inf_nan=False)

    invoiceNumber: str = Field(
        description="The unique identifier for this invoice, avoid special characters like # and * and \\x"
    )
    issueDate: str = Field(description="The date when the invoice was issued")
    companyName: str = Field(description="The name of the company that issued the invoice")
    companyAddress: str = Field(description="The address of the company that issued the invoice")
    dueDate: str = Field(description="The date by which the invoice should be paid")
    totalAmount: float = Field(description="The total amount due on the invoice")
    currency: str = Field(description="The currency used in the invoice")
    customerName: str = Field(description="The name of the customer or company being billed")
    customerAddress: str = Field(description="The billing address of the customer")
    taxes: float = Field(
        ge=0,
        description="The total amount of taxes applied to the invoice, just return 0 if no taxes are applied",
    )

    @field_validator("invoiceNumber")
    @classmethod
    def _no_markup_in_invoice_number(cls, v: str) -> str:
        for token in _FORBIDDEN_INVOICE_NUMBER_CHARS:
            if token in v:
                raise ValueError(f"must not contain {token!r}")
        if any(ord(c) < 32 or ord(c) == 127 for c in v):
            raise ValueError("must not contain control characters")
        return v


@dataclass(frozen=True)
class SchemaField:
    name: str
    type: str  # JSON schema type: "string" or "number"
    description: str


_JSON_TYPES = {str: "string", float: "number"}

SCHEMA_FIELDS: tuple[SchemaField, ...] = tuple(
    SchemaField(name, _JSON_TYPES[info.annotation], info.description or "")
    for name, info in InvoiceRecord.model_fields.items()
)

CSV_COLUMNS: tuple[str, ...] = (FILE_NAME_COLUMN,) + tuple(f.name for f in SCHEMA_FIELDS)


def request_schema() -> dict[str, Any]:
    """JSON schema sent with the generation request (strict structured output)."""
    return {
        "type": "object",
        "properties": {
            f.name: {"type": f.type, "description": f.description} for f in SCHEMA_FIELDS
        },
        "required": [f.name for f in SCHEMA_FIELDS],
        "additionalProperties": False,
    }


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a response payload: a record, or the reasons there is none."""
    record: Optional[InvoiceRecord] = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.record is not None


def validate_record(payload: Any) -> ValidationOutcome:
    """Check a decoded response against the schema. Never raises for bad payloads."""
    if not isinstance(payload, dict):
        return ValidationOutcome(errors=(f"expected a JSON object, got {type(payload).__name__}",))
    try:
        return ValidationOutcome(record=InvoiceRecord.model_validate(payload))
    except PydanticValidationError as e:
        errors = tuple(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        return ValidationOutcome(errors=errors)
