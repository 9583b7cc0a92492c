from pydantic import BaseModel, Field


class UserRead(BaseModel):
    id: str = Field(
        description="Unique internal ID of the user",
        examples=["usr_12345678-1234-5678-1234-567812345678"],
    )
    email: str = Field(
        description="Email asserted by the identity provider", examples=["reader@example.com"]
    )
    name: str | None = Field(default=None, description="Display name, when known")
