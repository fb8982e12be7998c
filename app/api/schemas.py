"""
Shared pydantic base models for the HTTP layer.

Wire format is camelCase (domainId, createdAt, ...); snake_case is accepted
on input too. Request models are strict: "5" is not an int and 1 is not a
bool.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response models (built from domain entities)"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiRequest(ApiModel):
    """Base for request bodies - no type coercion"""

    model_config = ConfigDict(strict=True)
