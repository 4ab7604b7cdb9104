from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

class BaseSchema(BaseModel):


    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        extra="ignore",
    )

class APIResponse(BaseModel, Generic[T]):


    success: bool
    data: T | None = None
    message: str | None = None
    error: Any = None

def coerce_object_id(value: Any) -> Any:
    """
    Normalize a reference that may arrive either as a bare id or as a
    populated document (``{"_id": ..., ...}``) into a string id.
    """
    if isinstance(value, dict):
        value = value.get("_id", value.get("id"))
    if value is None:
        return None
    return str(value)
