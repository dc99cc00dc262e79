"""
Maintenance endpoints.

/sync is destructive: it drops every table and recreates the schema.
"""

import logging
from fastapi import APIRouter, Depends

from jobboard.core.database import DataStore, get_store
from jobboard.core.errors import translate_errors
from jobboard.schemas.common import MessageResponse

router = APIRouter(tags=["Admin"])
logger = logging.getLogger(__name__)


@router.get("/sync", status_code=201, response_model=MessageResponse)
def sync_schema(store: DataStore = Depends(get_store)):
    """
    Drop and recreate the whole database schema. All data is deleted.
    """
    with translate_errors():
        store.reset_schema()

    return {"message": "created"}
