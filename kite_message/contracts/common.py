"""
Common base model for message-builder contracts.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ComponentKind(str, Enum):
    """Tags for the interactive component union."""

    BUTTON = "button"
    LINK_BUTTON = "link_button"
    SELECT_MENU = "select_menu"


class BaseContract(BaseModel):
    """Base model for all normalized message contracts."""

    model_config = ConfigDict(
        # Validate data on assignment
        validate_assignment=True,
        # Use enum values in JSON
        use_enum_values=True,
        # Forbid extra fields so normalized output matches the webhook shape
        extra="forbid",
    )
