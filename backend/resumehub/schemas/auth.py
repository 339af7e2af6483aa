"""Identity schemas."""

from pydantic import BaseModel


class Identity(BaseModel):
    """The authenticated principal, as asserted by the identity provider."""

    id: str
    email: str = ""
    display_name: str = ""
    photo_url: str = ""
