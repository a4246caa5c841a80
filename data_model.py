import datetime
import re
from pydantic import BaseModel, ConfigDict, Field, field_validator

# slugs double as URL path segments and file stems
SLUG_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._-]*$"
SLUG_RE = re.compile(SLUG_PATTERN)


class PostMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1, pattern=SLUG_PATTERN)
    title: str
    subtitle: str
    date: str

    @field_validator("title", "subtitle", "date", mode="before")
    @classmethod
    def to_display_string(cls, value):
        # YAML reads `title: 1984` as a number
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: PostMetadata
    content: str
