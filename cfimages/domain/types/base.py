from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field


def _snake_to_camel(name: str) -> str:
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class BaseInfo(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        alias_generator=_snake_to_camel,
        serialize_by_alias=True,
    )


class ResponseInfo(BaseInfo):
    code: int = Field(ge=1000)
    message: str


ResultT = TypeVar("ResultT")


class ApiResponse(BaseInfo, Generic[ResultT]):
    """Envelope shared by every JSON response of the Images API."""

    result: ResultT
    success: bool
    errors: List[ResponseInfo]
    messages: List[ResponseInfo]
