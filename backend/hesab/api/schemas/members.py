from pydantic import BaseModel, Field


class MemberCreateRequest(BaseModel):
    name: str = Field(min_length=1)


class MemberResponse(BaseModel):
    id: str
    name: str
