from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case attributes in Python, camelCase field names on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
