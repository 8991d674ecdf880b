"""Shared schema bits: camelCase wire names and the acting-user body."""
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActorRequest(CamelModel):
    """Body carrying the id of the user performing the action."""
    user_id: UUID


class MessageResponse(BaseModel):
    message: str
