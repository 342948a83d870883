"""
Quartzy tool catalog
--------------------
Every tool exposed by the server is declared here with its description, its
JSON input schema (what hosts see) and its argument model (what is enforced).

Tools exposed:
 - quartzy_health_check
 - quartzy_get_current_user
 - quartzy_list_labs / quartzy_get_lab
 - quartzy_list_inventory_items / quartzy_get_inventory_item
 - quartzy_update_inventory_item_quantity
 - quartzy_list_order_requests / quartzy_get_order_request
 - quartzy_create_order_request / quartzy_update_order_request
 - quartzy_list_types
 - quartzy_list_webhooks / quartzy_get_webhook
 - quartzy_create_webhook / quartzy_update_webhook
 - quartzy_list_tools
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type
from urllib.parse import quote

import httpx

from .client import QuartzyClient
from .schemas import (
    ORDER_REQUEST_STATUSES,
    CreateOrderRequestArgs,
    CreateWebhookArgs,
    LabFilterArgs,
    ListLabsArgs,
    ListTypesArgs,
    ListWebhooksArgs,
    NoArgs,
    ResourceIdArgs,
    ToolArguments,
    ToolDescriptor,
    ToolResponse,
    UpdateInventoryQuantityArgs,
    UpdateOrderRequestArgs,
    UpdateWebhookArgs,
)

# Catalog-aware handlers also receive the dispatcher's descriptors
ToolHandler = Callable[..., Awaitable[ToolResponse]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Dict[str, Any]
    arguments: Type[ToolArguments]
    handler: ToolHandler
    catalog_aware: bool = False

    @property
    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )


TOOL_REGISTRY: Dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    *,
    description: str,
    arguments: Type[ToolArguments] = NoArgs,
    properties: Optional[Dict[str, Any]] = None,
    required: Optional[List[str]] = None,
    catalog_aware: bool = False,
) -> Callable[[ToolHandler], ToolHandler]:
    """Register an async handler under ``name`` in the tool catalog."""

    input_schema: Dict[str, Any] = {"type": "object", "properties": properties or {}}
    if required:
        input_schema["required"] = list(required)

    def decorator(func: ToolHandler) -> ToolHandler:
        if name in TOOL_REGISTRY:
            raise ValueError(f"Tool already registered: {name}")
        TOOL_REGISTRY[name] = ToolSpec(
            name=name,
            description=description,
            input_schema=input_schema,
            arguments=arguments,
            handler=func,
            catalog_aware=catalog_aware,
        )
        return func

    return decorator


def _format_query_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_path(base: str, **filters: Any) -> str:
    """
    Append filters as a query string, skipping absent, empty and zero values.

    Keyword order is preserved, so ``build_path("/labs", organization_id="abc",
    page=2)`` gives ``/labs?organization_id=abc&page=2``.
    """
    params = [(key, _format_query_value(value)) for key, value in filters.items() if value]
    if not params:
        return base
    return f"{base}?{httpx.QueryParams(params)}"


def resource_path(base: str, resource_id: str) -> str:
    return f"{base}/{quote(resource_id, safe='')}"


def _property(type_: str, description: str, **extra: Any) -> Dict[str, Any]:
    return {"type": type_, "description": description, **extra}


PAGE = _property("number", "The page of results to retrieve")


def _id_property(what: str) -> Dict[str, Any]:
    return _property("string", f"The UUID of the {what} to retrieve")


# -----------------------------
# Health / user
# -----------------------------


@register_tool(
    "quartzy_health_check",
    description="Check the health status of the Quartzy API service",
)
async def health_check(client: QuartzyClient, args: NoArgs) -> ToolResponse:
    data = await client.execute("/healthz")
    return ToolResponse.success(data, "Quartzy API Health Status:")


@register_tool(
    "quartzy_get_current_user",
    description="Get information about the current authenticated user",
)
async def get_current_user(client: QuartzyClient, args: NoArgs) -> ToolResponse:
    data = await client.execute("/user")
    return ToolResponse.success(data, "Current User Information:")


# -----------------------------
# Labs
# -----------------------------


@register_tool(
    "quartzy_list_labs",
    description="Get a list of labs, optionally filtered by organization",
    arguments=ListLabsArgs,
    properties={
        "organization_id": _property("string", "The Organization ID to filter on (UUID format)"),
        "page": PAGE,
    },
)
async def list_labs(client: QuartzyClient, args: ListLabsArgs) -> ToolResponse:
    path = build_path("/labs", organization_id=args.organization_id, page=args.page)
    data = await client.execute(path)
    return ToolResponse.success(data, "Labs:")


@register_tool(
    "quartzy_get_lab",
    description="Get details of a specific lab by ID",
    arguments=ResourceIdArgs,
    properties={"id": _id_property("lab")},
    required=["id"],
)
async def get_lab(client: QuartzyClient, args: ResourceIdArgs) -> ToolResponse:
    data = await client.execute(resource_path("/labs", args.id))
    return ToolResponse.success(data, f"Lab Details ({args.id}):")


# -----------------------------
# Inventory items
# -----------------------------


@register_tool(
    "quartzy_list_inventory_items",
    description="List and filter inventory items",
    arguments=LabFilterArgs,
    properties={
        "page": PAGE,
        "lab_id": _property("string", "The Lab ID to filter on"),
    },
)
async def list_inventory_items(client: QuartzyClient, args: LabFilterArgs) -> ToolResponse:
    path = build_path("/inventory-items", lab_id=args.lab_id, page=args.page)
    data = await client.execute(path)
    return ToolResponse.success(data, "Inventory Items:")


@register_tool(
    "quartzy_get_inventory_item",
    description="Get details of a specific inventory item",
    arguments=ResourceIdArgs,
    properties={"id": _id_property("inventory item")},
    required=["id"],
)
async def get_inventory_item(client: QuartzyClient, args: ResourceIdArgs) -> ToolResponse:
    data = await client.execute(resource_path("/inventory-items", args.id))
    return ToolResponse.success(data, f"Inventory Item Details ({args.id}):")


@register_tool(
    "quartzy_update_inventory_item_quantity",
    description="Update the quantity of an inventory item",
    arguments=UpdateInventoryQuantityArgs,
    properties={
        "id": _property("string", "The ID of the inventory item to update"),
        "quantity": _property("string", "The new quantity value"),
    },
    required=["id", "quantity"],
)
async def update_inventory_item_quantity(
    client: QuartzyClient, args: UpdateInventoryQuantityArgs
) -> ToolResponse:
    data = await client.execute(
        resource_path("/inventory-items", args.id),
        "PUT",
        {"quantity": args.quantity},
    )
    return ToolResponse.success(data, f"Updated Inventory Item ({args.id}):")


# -----------------------------
# Order requests
# -----------------------------


@register_tool(
    "quartzy_list_order_requests",
    description="List and filter order requests",
    arguments=LabFilterArgs,
    properties={
        "page": PAGE,
        "lab_id": _property("string", "The Lab ID to filter on"),
    },
)
async def list_order_requests(client: QuartzyClient, args: LabFilterArgs) -> ToolResponse:
    path = build_path("/order-requests", lab_id=args.lab_id, page=args.page)
    data = await client.execute(path)
    return ToolResponse.success(data, "Order Requests:")


@register_tool(
    "quartzy_get_order_request",
    description="Get details of a specific order request",
    arguments=ResourceIdArgs,
    properties={"id": _id_property("order request")},
    required=["id"],
)
async def get_order_request(client: QuartzyClient, args: ResourceIdArgs) -> ToolResponse:
    data = await client.execute(resource_path("/order-requests", args.id))
    return ToolResponse.success(data, f"Order Request Details ({args.id}):")


@register_tool(
    "quartzy_create_order_request",
    description="Create a new order request",
    arguments=CreateOrderRequestArgs,
    properties={
        "lab_id": _property("string", "The UUID of the lab"),
        "type_id": _property("string", "The UUID of the type"),
        "name": _property("string", "Name of the item being ordered"),
        "vendor_product_id": _property("string", "The UUID of the vendor product (optional)"),
        "vendor_name": _property("string", "Name of the vendor"),
        "catalog_number": _property("string", "Vendor catalog number"),
        "price": {
            "type": "object",
            "properties": {
                "amount": _property("string", "Price amount as string integer"),
                "currency": _property("string", "Currency code (e.g., USD)"),
            },
            "required": ["amount", "currency"],
        },
        "quantity": _property("number", "Quantity to order"),
        "required_before": _property("string", "Required date in YYYY-MM-DD format"),
        "notes": _property("string", "Additional notes"),
    },
    required=["lab_id", "type_id", "name", "vendor_name", "catalog_number", "price", "quantity"],
)
async def create_order_request(client: QuartzyClient, args: CreateOrderRequestArgs) -> ToolResponse:
    data = await client.execute("/order-requests", "POST", args.to_body())
    return ToolResponse.success(data, "Created Order Request:")


@register_tool(
    "quartzy_update_order_request",
    description="Update the status of an order request",
    arguments=UpdateOrderRequestArgs,
    properties={
        "id": _property("string", "The UUID of the order request to update"),
        "status": _property(
            "string",
            "New status for the order request",
            enum=list(ORDER_REQUEST_STATUSES),
        ),
    },
    required=["id", "status"],
)
async def update_order_request(client: QuartzyClient, args: UpdateOrderRequestArgs) -> ToolResponse:
    data = await client.execute(
        resource_path("/order-requests", args.id),
        "PUT",
        {"status": args.status},
    )
    return ToolResponse.success(data, f"Updated Order Request ({args.id}):")


# -----------------------------
# Types
# -----------------------------


@register_tool(
    "quartzy_list_types",
    description="List and filter item types",
    arguments=ListTypesArgs,
    properties={
        "lab_id": _property("string", "The Lab UUID to filter on"),
        "name": _property("string", "The Type Name to filter on"),
        "page": PAGE,
    },
)
async def list_types(client: QuartzyClient, args: ListTypesArgs) -> ToolResponse:
    path = build_path("/types", lab_id=args.lab_id, name=args.name, page=args.page)
    data = await client.execute(path)
    return ToolResponse.success(data, "Types:")


# -----------------------------
# Webhooks
# -----------------------------


@register_tool(
    "quartzy_list_webhooks",
    description="List and filter webhooks",
    arguments=ListWebhooksArgs,
    properties={
        "organization_id": _property("string", "The Organization UUID to filter on"),
        "page": PAGE,
    },
)
async def list_webhooks(client: QuartzyClient, args: ListWebhooksArgs) -> ToolResponse:
    path = build_path("/webhooks", organization_id=args.organization_id, page=args.page)
    data = await client.execute(path)
    return ToolResponse.success(data, "Webhooks:")


@register_tool(
    "quartzy_get_webhook",
    description="Get details of a specific webhook",
    arguments=ResourceIdArgs,
    properties={"id": _id_property("webhook")},
    required=["id"],
)
async def get_webhook(client: QuartzyClient, args: ResourceIdArgs) -> ToolResponse:
    data = await client.execute(resource_path("/webhooks", args.id))
    return ToolResponse.success(data, f"Webhook Details ({args.id}):")


@register_tool(
    "quartzy_create_webhook",
    description="Create a new webhook for lab or organization events",
    arguments=CreateWebhookArgs,
    properties={
        "lab_id": _property("string", "The Lab UUID (use either lab_id or organization_id)"),
        "organization_id": _property(
            "string", "The Organization UUID (use either lab_id or organization_id)"
        ),
        "name": _property("string", "Name for the webhook"),
        "url": _property("string", "URL endpoint for the webhook"),
        "event_types": _property(
            "array",
            "Array of event types to subscribe to",
            items={"type": "string"},
        ),
        "is_enabled": _property("boolean", "Whether the webhook is enabled"),
        "is_verified": _property("boolean", "Whether the webhook URL is verified"),
        "is_signed": _property("boolean", "Whether webhook payloads should be signed"),
    },
    required=["url"],
)
async def create_webhook(client: QuartzyClient, args: CreateWebhookArgs) -> ToolResponse:
    data = await client.execute("/webhooks", "POST", args.to_body())
    return ToolResponse.success(data, "Created Webhook:")


@register_tool(
    "quartzy_update_webhook",
    description="Update webhook settings (currently only supports enabling/disabling)",
    arguments=UpdateWebhookArgs,
    properties={
        "id": _property("string", "The UUID of the webhook to update"),
        "is_enabled": _property("boolean", "Whether the webhook should be enabled"),
    },
    required=["id", "is_enabled"],
)
async def update_webhook(client: QuartzyClient, args: UpdateWebhookArgs) -> ToolResponse:
    data = await client.execute(
        resource_path("/webhooks", args.id),
        "PUT",
        {"is_enabled": args.is_enabled},
    )
    return ToolResponse.success(data, f"Updated Webhook ({args.id}):")


# -----------------------------
# Catalog
# -----------------------------


@register_tool(
    "quartzy_list_tools",
    description="List the available Quartzy tools with their input schemas",
    catalog_aware=True,
)
async def list_tools(
    client: QuartzyClient, args: NoArgs, catalog: List[ToolDescriptor]
) -> ToolResponse:
    """Answered locally; no Quartzy request and no access token needed."""
    return ToolResponse.success(
        [descriptor.to_mcp() for descriptor in catalog],
        "Available Tools:",
    )
