from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckAccessRequest(CamelModel):
    url: str | None = None


class CheckAccessOut(CamelModel):
    accessible: bool
    is_folder: bool
    file_id: str


class MediaUrlRequest(CamelModel):
    url: str | None = None
    file_id: str | None = None
    media_type: Literal["image", "video", "auto"] | None = None


class MediaFileOut(CamelModel):
    id: str
    name: str
    url: str
    type: Literal["image", "video"]
    mime_type: str


class MediaUrlOut(CamelModel):
    type: Literal["single", "folder"]
    files: list[MediaFileOut] = Field(default_factory=list)
    count: int = 0
    is_folder: bool = False

    # Folder guidance
    message: str | None = None
    instruction: str | None = None
    folder_url: str | None = None
