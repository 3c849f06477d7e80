"""
Key-value form routes - insert, search, update, create, delete and list
Each route runs exactly one statement through the service layer and answers with HTML.
"""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Form, Query
from fastapi.responses import HTMLResponse

from services.key_value_service import KeyValueService, get_key_value_service
from utils.error_handling import set_endpoint_context
from utils import pages

router = APIRouter()
logger = logging.getLogger(__name__)

CONFIRMATION_HEADER = "X-Action-Required"
CONFIRM_CREATE = "confirm-create"


@router.post("/insert", response_class=HTMLResponse)
async def insert_entry(
    key: str = Form(""),
    value: str = Form(""),
    service: KeyValueService = Depends(get_key_value_service)
):
    """Insert a key-value pair"""
    set_endpoint_context("insert")

    result = await service.insert(key, value)
    if not result.success:
        logger.error(f"Error inserting data: {result.error}")
        raise HTTPException(status_code=500, detail="Error inserting data into the database.")

    return pages.key_value_page("Data inserted successfully!", key, value)


@router.post("/search", response_class=HTMLResponse)
async def search_entries(
    search_key: str = Form("", alias="searchKey"),
    service: KeyValueService = Depends(get_key_value_service)
):
    """Search for entries whose key contains searchKey (case-insensitive)"""
    set_endpoint_context("search")

    result = await service.search(search_key)
    if not result.success:
        logger.error(f"Error searching data: {result.error}")
        raise HTTPException(status_code=500, detail="Error searching data in the database.")

    if not result.data:
        return pages.message_page(f'No entries found containing "{search_key}".')

    return pages.table_page(f'Search Results for "{search_key}"', result.data)


@router.post("/update", response_class=HTMLResponse)
async def update_entry(
    update_key: str = Form("", alias="updateKey"),
    new_value: str = Form("", alias="newValue"),
    service: KeyValueService = Depends(get_key_value_service)
):
    """
    Update the value of an existing key

    When no entry matches, nothing is written. The response instead asks the
    caller to confirm creation; a confirmed prompt issues GET /create with the
    same key and value.
    """
    set_endpoint_context("update")

    result = await service.update(update_key, new_value)
    if not result.success:
        logger.error(f"Error updating data: {result.error}")
        raise HTTPException(status_code=500, detail="Error updating data in the database.")

    if result.count == 0:
        logger.info(f"No record found for key {update_key!r} - offering create")
        return HTMLResponse(
            content=pages.confirm_create_script(update_key, new_value),
            headers={CONFIRMATION_HEADER: CONFIRM_CREATE}
        )

    updated = result.data[0]
    note = f"{result.count} records updated." if result.count > 1 else ""
    return pages.key_value_page(
        "Value updated successfully!",
        updated.key,
        updated.value,
        value_label="New Value",
        note=note
    )


@router.get("/create", response_class=HTMLResponse)
async def create_entry(
    key: Optional[str] = Query(None),
    value: Optional[str] = Query(None),
    service: KeyValueService = Depends(get_key_value_service)
):
    """Create a new key-value pair (follow-up to a confirmed update miss)"""
    set_endpoint_context("create")

    if not key or not value:
        return pages.message_page("Missing key or value parameters.")

    result = await service.insert(key, value)
    if not result.success:
        logger.error(f"Error creating new record: {result.error}")
        raise HTTPException(status_code=500, detail="Error creating new record in the database.")

    new_record = result.data[0]
    return pages.key_value_page("New record created successfully!", new_record.key, new_record.value)


@router.post("/delete", response_class=HTMLResponse)
async def delete_entries(
    delete_key: str = Form("", alias="deleteKey"),
    service: KeyValueService = Depends(get_key_value_service)
):
    """Delete every entry with the given key"""
    set_endpoint_context("delete")

    result = await service.delete(delete_key)
    if not result.success:
        logger.error(f"Error deleting data: {result.error}")
        raise HTTPException(status_code=500, detail="Error deleting data from the database.")

    if result.count == 0:
        return pages.message_page(f'No record found with key: "{delete_key}"')

    return pages.table_page(
        f'Record(s) with key "{delete_key}" deleted successfully!',
        result.data,
        separator="<hr>"
    )


@router.get("/list", response_class=HTMLResponse)
async def list_entries(
    service: KeyValueService = Depends(get_key_value_service)
):
    """Show all key-value pairs"""
    set_endpoint_context("list")

    result = await service.list_all()
    if not result.success:
        logger.error(f"Error retrieving data: {result.error}")
        raise HTTPException(status_code=500, detail="Error retrieving data from the database.")

    return pages.table_page("All Key-Value Pairs", result.data, level=1, include_list=False)
