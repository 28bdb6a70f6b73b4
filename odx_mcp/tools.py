"""
Fixed tools published by the server: connection settings plus company and
partner lookup / creation on ``res.company`` and ``res.partner``.

The plain async functions below do the work and are what the registered
tools call. Remote failures are not caught here; FastMCP turns them into
error results for the client.
"""

import json
import logging
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import EmailStr, Field

from odx_mcp.config import Settings
from odx_mcp.domain import And, Comparison, Or, to_domain

logger = logging.getLogger(__name__)

COMPANY_MODEL = "res.company"
PARTNER_MODEL = "res.partner"
CREATE_TZ = "UTC"


def _text(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def connection_settings(settings: Settings) -> Dict[str, Any]:
    info = settings.client
    return {
        "url": info.instance.url,
        "database": info.instance.db,
        "gateway": info.gateway_url,
        "userUid": info.instance.user_id,
    }


def company_domain(name: Optional[str] = None, id: Optional[int] = None) -> list:
    terms = []
    if name:
        terms.append(Comparison("name", "ilike", name))
    if id is not None:
        terms.append(Comparison("id", "=", id))
    return to_domain(And(terms))


def partner_domain(id: Optional[int] = None, email: Optional[str] = None,
                   name: Optional[str] = None) -> Optional[list]:
    """Partner filter, or None when nothing was given to filter on."""
    if id is not None:
        return to_domain(Comparison("id", "=", id))
    by_email = Comparison("email", "=", email.lower()) if email else None
    by_name = Comparison("name", "ilike", name) if name else None
    if by_email and by_name:
        return to_domain(Or([by_email, by_name]))
    if by_email or by_name:
        return to_domain(by_email or by_name)
    return None


def partner_values(name: str, email: Optional[str] = None, phone: Optional[str] = None,
                   is_company: Optional[bool] = None) -> Dict[str, Any]:
    # Odoo expects False, not null, for empty fields
    return {
        "name": name,
        "email": email or False,
        "phone": phone or False,
        "is_company": is_company or False,
    }


async def get_companies(client, name: Optional[str] = None, id: Optional[int] = None,
                        tz: str = "UTC") -> List[dict]:
    res = await client.search_read(COMPANY_MODEL, company_domain(name, id), {"context": {"tz": tz}})
    return (res or {}).get("result") or []


async def get_partners(client, id: Optional[int] = None, email: Optional[str] = None,
                       name: Optional[str] = None, tz: str = "UTC") -> List[dict]:
    domain = partner_domain(id, email, name)
    if domain is None:
        return []
    res = await client.search_read(PARTNER_MODEL, domain, {"context": {"tz": tz}})
    return (res or {}).get("result") or []


async def create_partner(client, name: str, email: Optional[str] = None, phone: Optional[str] = None,
                         is_company: Optional[bool] = None) -> bool:
    values = partner_values(name, email, phone, is_company)
    await client.create(PARTNER_MODEL, [values], {"context": {"tz": CREATE_TZ}})
    logger.info("Created %s %r", PARTNER_MODEL, name)
    return True


def register_config_tool(mcp: FastMCP, settings: Settings):
    @mcp.tool(
        name="odx_config",
        title="ODXProxy Client Settings",
        description=(
            "Retrieve the ODXProxy client configuration, including server URL, database, gateway endpoint "
            "and user ID. Use it to tell which Odoo instance the client is connected to. If the user asks "
            "for only part of it (e.g. where is this connected to?) you can always answer in full."
        ),
    )
    async def odx_config() -> str:
        return _text(connection_settings(settings))


def register_base_tools(mcp: FastMCP, client, settings: Settings):
    tz = settings.query_tz

    @mcp.tool(
        name="get_companies",
        title="Get Companies",
        description=(
            "Retrieve company records from the Odoo `res.company` model.\n\n"
            "- If `name` is provided, performs a partial, case-insensitive search on company names.\n"
            "- If `id` is provided, retrieves the exact company with that ID.\n"
            "- If both are provided, both filters are applied together.\n"
            "- If neither is provided, all companies are returned.\n\n"
            "Many Odoo models (res.partner, res.users, invoices) have a `company_id` field pointing to this "
            "model. When you meet a company ID, call this tool with it to fetch the company details."
        ),
    )
    async def get_companies_tool(
        name: Annotated[Optional[str], Field(description="Partial match on company name")] = None,
        id: Annotated[Optional[int], Field(description="Exact company ID")] = None,
    ) -> str:
        return _text(await get_companies(client, name=name, id=id, tz=tz))

    @mcp.tool(
        name="get_partners",
        title="Get Partners by ID, email, or name",
        description=(
            "Retrieve partner records from the Odoo `res.partner` model.\n\n"
            "- If `id` is provided, fetches the exact partner with that ID (other filters are ignored).\n"
            "- If `email` is provided, performs an exact match on the email address.\n"
            "- If `name` is provided, performs a partial, case-insensitive search on partner names.\n"
            "- If both `name` and `email` are provided, partners matching either are returned.\n"
            "- If no input is provided, returns an empty list.\n\n"
            "Invoices, sales orders and users reference `res.partner` through `partner_id`. When you meet "
            "such a reference, call this tool with that `id` to get the partner's details."
        ),
    )
    async def get_partners_tool(
        id: Annotated[Optional[int], Field(description="Exact partner ID")] = None,
        email: Annotated[Optional[EmailStr], Field(description="Exact partner email address")] = None,
        name: Annotated[Optional[str], Field(description="Partial match on partner name")] = None,
    ) -> str:
        return _text(await get_partners(client, id=id, email=email, name=name, tz=tz))

    @mcp.tool(
        name="create_partner",
        title="Create Partner",
        description=(
            "Create a new partner record in the Odoo `res.partner` model.\n\n"
            "- `name` is required.\n"
            "- `email`, `phone` and `is_company` are optional.\n"
            "- Users may give the information one field at a time.\n\n"
            "Before running this tool, ask whether the user wants to provide the optional fields "
            "(`email`, `phone`, `is_company`) and only proceed once they confirm or decline.\n\n"
            "Returns `true` once the partner has been created."
        ),
    )
    async def create_partner_tool(
        name: Annotated[str, Field(description="Name of the partner")],
        email: Annotated[Optional[EmailStr], Field(description="Email of the partner (optional)")] = None,
        phone: Annotated[Optional[str], Field(description="Phone number of the partner (optional)")] = None,
        is_company: Annotated[Optional[bool], Field(description="Whether this partner is a company")] = None,
    ) -> str:
        await create_partner(client, name=name, email=email, phone=phone, is_company=is_company)
        return "true"
