import uuid
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CamelCaseBaseModel(BaseModel):
    """
    Base model with camelCase field aliases.

    Client payloads and responses use camelCase keys while Python code works
    with snake_case attributes:

    - Input: camelCase keys (or snake_case names) populate the fields.
    - Output: call `model_dump(by_alias=True)` to serialize back to camelCase.
    - UUIDs and Enums are serialized as plain strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("*")
    def serialize_any(self, value):
        if isinstance(value, uuid.UUID):
            return str(value)

        if isinstance(value, Enum):
            return value.value

        return value
