"""
Input models for store writes.

Every create/update payload is validated here before a session is opened, so
a missing required field or an invalid status never reaches the database.
"""

import json
import uuid
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError, field_validator
from typing_extensions import Annotated

from directors_chair.database.errors import ConstraintViolationError
from directors_chair.database.models.status import SceneStatus, VideoJobStatus

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

InputModel = TypeVar("InputModel", bound=BaseModel)


def _new_id() -> str:
    return uuid.uuid4().hex


class StoreInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_row(self) -> Dict[str, Any]:
        """Column values to write; omitted optionals are left to the column defaults"""
        return self.model_dump(exclude_none=True, mode="json")


class ProjectCreate(StoreInput):
    id: RequiredText = Field(default_factory=_new_id, description="Client-generated project id")
    name: RequiredText = Field(..., description="Project title")
    genre: Optional[str] = Field(default=None, description="Defaults to 'drama'")
    synopsis: Optional[str] = None
    tone: Optional[str] = Field(default=None, description="Defaults to 'cinematic'")


class ProjectUpdate(StoreInput):
    name: Optional[RequiredText] = None
    genre: Optional[str] = None
    synopsis: Optional[str] = None
    tone: Optional[str] = None


class CharacterCreate(StoreInput):
    id: RequiredText = Field(default_factory=_new_id)
    project_id: RequiredText = Field(..., description="Owning project")
    name: RequiredText
    description: Optional[str] = None
    photo_data: Optional[str] = Field(default=None, description="Inline image payload or reference")


class CharacterUpdate(StoreInput):
    name: Optional[RequiredText] = None
    description: Optional[str] = None
    photo_data: Optional[str] = None


class _SceneFields(StoreInput):
    title: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    camera_angle: Optional[str] = None
    lighting: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=1, description="Seconds")
    dialog: Optional[str] = None
    characters: Optional[List[str]] = Field(default=None, description="Referenced character ids")
    status: Optional[SceneStatus] = None
    video_url: Optional[str] = None
    sort_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("characters")
    @classmethod
    def dedupe_characters(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return list(dict.fromkeys(v for v in value if v))

    def to_row(self) -> Dict[str, Any]:
        row = super().to_row()
        characters = row.pop("characters", None)
        if characters is not None:
            row["characters_json"] = json.dumps(characters)
        return row


class SceneCreate(_SceneFields):
    id: RequiredText = Field(default_factory=_new_id)
    project_id: RequiredText
    scene_number: int = Field(..., description="Author-facing ordinal, need not be unique")


class SceneUpdate(_SceneFields):
    scene_number: Optional[int] = None


class VideoJobCreate(StoreInput):
    id: RequiredText = Field(default_factory=_new_id)
    scene_id: RequiredText
    provider: RequiredText = Field(..., description="Generation provider, e.g. kling")
    job_id: RequiredText = Field(..., description="Provider's tracking id")
    status: Optional[VideoJobStatus] = None
    video_url: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0.0)


class VideoJobUpdate(StoreInput):
    """Status and completion time change only through a status transition"""
    provider: Optional[RequiredText] = None
    job_id: Optional[RequiredText] = None
    video_url: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0.0)


def validate_input(model: Type[InputModel], data: Dict[str, Any]) -> InputModel:
    """Validate a write payload, translating pydantic errors into ConstraintViolationError"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConstraintViolationError(f"Invalid {model.__name__}: {field}: {first.get('msg')}", field=field) from e
