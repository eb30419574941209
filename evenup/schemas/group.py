from pydantic import BaseModel
from typing import List, Literal

class GroupCreate(BaseModel):
    name: str

class GroupMemberAdd(BaseModel):
    user_id: int
    role: Literal["admin", "member"] = "member"

class GroupMemberOut(BaseModel):
    user_id: int
    group_id: int
    role: str

    class Config:
        from_attributes = True

class GroupOut(BaseModel):
    id: int
    name: str
    created_by: int
    members: List[GroupMemberOut] = []

    class Config:
        from_attributes = True
