from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

class ChangeNotification(BaseModel):
    """Row change pushed by the hosted backend for a watched table."""
    type: str = Field(..., description="INSERT, UPDATE or DELETE")
    table: str
    schema_name: str = Field("public", alias="schema")
    record: Optional[Dict[str, Any]] = None
    old_record: Optional[Dict[str, Any]] = None

    model_config = {"populate_by_name": True}

class InvalidationResult(BaseModel):
    table: str
    invalidated: List[str] = Field(..., description="Cache views cleared for the table")
