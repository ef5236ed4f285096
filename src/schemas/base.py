"""Shared pydantic base for camelCase JSON bodies."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose JSON keys are camelCase (firstName, createdAt, ...).

    Requests accept both camelCase and snake_case keys. Unknown keys are dropped.
    FastAPI serializes response models by alias, so responses are always camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )
