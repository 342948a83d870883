"""
Schemas for the Quartzy tools.

Each tool validates its raw argument mapping with one of the *Args models
below before any request is built. Unknown keys are rejected and values are
not coerced: a page sent as "2" is an error, not 2.
"""

import json
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)

ORDER_REQUEST_STATUSES = (
    "CREATED",
    "CANCELLED",
    "APPROVED",
    "ORDERED",
    "BACKORDERED",
    "RECEIVED",
)


def _check_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


# JSON "number": ints and floats pass through untouched, bools are rejected
Number = Annotated[Union[int, float], PlainValidator(_check_number)]
RequiredStr = Annotated[StrictStr, Field(min_length=1)]


# -----------------------
# Tool arguments
# -----------------------


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NoArgs(ToolArguments):
    pass


class ResourceIdArgs(ToolArguments):
    id: RequiredStr


class ListLabsArgs(ToolArguments):
    organization_id: Optional[StrictStr] = None
    page: Optional[Number] = None


class LabFilterArgs(ToolArguments):
    """Filters shared by inventory-item and order-request listings."""

    lab_id: Optional[StrictStr] = None
    page: Optional[Number] = None


class UpdateInventoryQuantityArgs(ToolArguments):
    id: RequiredStr
    quantity: RequiredStr


class Price(BaseModel):
    # Passed upstream as given, extra keys included
    model_config = ConfigDict(extra="allow")

    amount: StrictStr
    currency: StrictStr


class CreateOrderRequestArgs(ToolArguments):
    lab_id: RequiredStr
    type_id: RequiredStr
    name: RequiredStr
    vendor_name: RequiredStr
    catalog_number: RequiredStr
    price: Price
    quantity: Number
    vendor_product_id: Optional[StrictStr] = None
    required_before: Optional[StrictStr] = None
    notes: Optional[StrictStr] = None

    @field_validator("quantity")
    @classmethod
    def _positive_quantity(cls, value: Union[int, float]) -> Union[int, float]:
        if value <= 0:
            raise ValueError("must be greater than 0")
        return value

    def to_body(self) -> Dict[str, Any]:
        body = self.model_dump(exclude_none=True, exclude={"price"})
        # price goes upstream untouched, None-valued extra keys included
        body["price"] = self.price.model_dump()
        return body


class UpdateOrderRequestArgs(ToolArguments):
    id: RequiredStr
    status: StrictStr

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        if value not in ORDER_REQUEST_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(ORDER_REQUEST_STATUSES)}")
        return value


class ListTypesArgs(ToolArguments):
    lab_id: Optional[StrictStr] = None
    name: Optional[StrictStr] = None
    page: Optional[Number] = None


class ListWebhooksArgs(ToolArguments):
    organization_id: Optional[StrictStr] = None
    page: Optional[Number] = None


class CreateWebhookArgs(ToolArguments):
    url: RequiredStr
    lab_id: Optional[StrictStr] = None
    organization_id: Optional[StrictStr] = None
    name: Optional[StrictStr] = None
    event_types: Optional[List[StrictStr]] = None
    is_enabled: Optional[StrictBool] = None
    is_verified: Optional[StrictBool] = None
    is_signed: Optional[StrictBool] = None

    @model_validator(mode="after")
    def _require_owner(self) -> "CreateWebhookArgs":
        # Both ids together are accepted and forwarded as-is
        if not self.lab_id and not self.organization_id:
            raise ValueError("Either lab_id or organization_id is required")
        return self

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UpdateWebhookArgs(ToolArguments):
    id: RequiredStr
    is_enabled: StrictBool


# -----------------------
# Catalog / responses
# -----------------------


class ToolDescriptor(BaseModel):
    """What a host sees when it lists tools."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_mcp(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolResponse(BaseModel):
    """A single text block plus the error flag returned for every tool call."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, data: Any, description: str) -> "ToolResponse":
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        return cls(text=f"{description}\n\n{payload}")

    @classmethod
    def failure(cls, message: str) -> "ToolResponse":
        return cls(text=f"Error: {message}", is_error=True)

    def to_content(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }
