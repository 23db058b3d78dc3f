"""
API routes for the subsidy catalog
"""
import logging
from typing import Any, Dict, List, Literal, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..models.subsidy import SubsidyProgram
from ..services.catalog_loader import CatalogValidationError, parse_catalog_entry
from ..services.mongo_service import MongoService, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subsidies", tags=["subsidies"])


@router.get("/", response_model=List[SubsidyProgram])
async def get_subsidies(
    status: Optional[Literal["active", "inactive"]] = Query(None, description="Filter by status"),
    store: MongoService = Depends(get_store)
):
    """
    Get all subsidies with optional status filtering
    """
    try:
        return await store.list_subsidies(status=status)
    except Exception as e:
        logger.error(f"Error fetching subsidies: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve subsidies: {str(e)}")


@router.get("/{subsidy_id}", response_model=SubsidyProgram)
async def get_subsidy(subsidy_id: str, store: MongoService = Depends(get_store)):
    """
    Get a specific subsidy with its eligibility rules
    """
    try:
        subsidy = await store.get_subsidy(subsidy_id)

        if not subsidy:
            raise HTTPException(status_code=404, detail=f"Subsidy not found: {subsidy_id}")

        return subsidy

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching subsidy {subsidy_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve subsidy: {str(e)}")


@router.post("/", response_model=SubsidyProgram, status_code=201)
async def create_subsidy(
    entry: Dict[str, Any] = Body(..., description="Raw catalog entry"),
    store: MongoService = Depends(get_store)
):
    """
    Add a subsidy to the catalog after validating its rules
    """
    try:
        subsidy = parse_catalog_entry(entry)

        created = await store.create_subsidy(subsidy)
        if not created:
            raise HTTPException(status_code=409, detail=f"Subsidy already exists: {subsidy.id}")

        return subsidy

    except CatalogValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating subsidy: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create subsidy: {str(e)}")
