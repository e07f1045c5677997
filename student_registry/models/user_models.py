from pydantic import ConfigDict, Field

from student_registry.schemas.camel_base_model import CamelCaseBaseModel


class User(CamelCaseBaseModel):
    """
    Staff account record.

    Not reachable through any endpoint. The password is kept as given, in
    plain text, so this model must not back a real login flow as is.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Internal record key")
    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="Plain-text password")
