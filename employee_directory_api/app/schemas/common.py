from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation returned by mutations."""

    message: str
