from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Static acknowledgement body returned by mutations"""
    message: str
