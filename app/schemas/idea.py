from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class IdeaStatus(str, Enum):
    idea = "idea"
    in_progress = "in-progress"
    completed = "completed"
    archived = "archived"


class Collaborator(BaseModel):
    id: str
    name: str = ""


class Idea(BaseModel):
    """A design idea as stored in its owner's collection (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    details: str = ""
    tags: list[str] = []
    images: list[str] = []
    website_url: Optional[str] = None
    priority: Priority = Priority.medium
    status: IdeaStatus = IdeaStatus.idea
    is_shared: bool = False
    owner_id: str = ""
    owner_name: str = ""
    collaborators: list[Collaborator] = []
    created_at: str = ""
    updated_at: str = ""

    @model_validator(mode="after")
    def _check_invariants(self):
        if not self.updated_at and self.created_at:
            self.updated_at = self.created_at
        if self.created_at and self.updated_at < self.created_at:
            raise ValueError("updatedAt must not be earlier than createdAt")
        seen = {self.owner_id}
        unique = []
        for c in self.collaborators:
            if c.id in seen:
                continue
            seen.add(c.id)
            unique.append(c)
        if len(unique) != len(self.collaborators):
            self.collaborators = unique
        return self

    def to_dict(self) -> dict:
        # fields the client never sent stay absent; explicit nulls are kept
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        return data


class SaveIdeasRequest(BaseModel):
    ideas: list[Idea]


class AddCollaboratorRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    collaborator_id: str = Field(..., min_length=1)
    collaborator_name: str = ""
