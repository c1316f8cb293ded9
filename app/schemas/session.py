from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Authenticated caller, resolved once per request from the bearer token."""

    user_id: str
    display_name: str
    email: str
