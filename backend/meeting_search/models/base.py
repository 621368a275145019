from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire. Accepts both on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(CamelModel):
    """Read-only domain record handed over by an upstream collaborator."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )
