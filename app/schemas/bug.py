from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BugStatus(str, Enum):
    open = "open"
    in_progress = "in-progress"
    closed = "closed"


class UserInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class BugCreate(BaseModel):
    title: str = ""
    description: str = ""
    userInfo: Optional[UserInfo] = None


class CommentCreate(BaseModel):
    text: str = ""
    userInfo: Optional[UserInfo] = None


class StatusUpdate(BaseModel):
    status: str


class Bug(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    status: BugStatus = BugStatus.open
    reported_by: str
    reporter_name: str
    reporter_email: Optional[str] = None
    created_at: str
    updated_at: str


class Comment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    bug_id: str
    text: str
    user_id: str
    user_name: str
    user_email: Optional[str] = None
    created_at: str
