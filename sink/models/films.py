from typing import Any

from pydantic import StrictFloat, StrictInt, StrictStr, ValidationError, model_validator
from sqlmodel import SQLModel, Field

from sink.errors import DecodeError


class Film(SQLModel):
    year: StrictInt = Field(default=0)
    length: StrictFloat = Field(default=0.0)
    title: StrictStr = Field(default="")
    subject: StrictStr = Field(default="")
    actor: StrictStr = Field(default="")
    actress: StrictStr = Field(default="")
    director: StrictStr = Field(default="")
    popularity: StrictFloat = Field(default=0.0)
    awards: StrictStr = Field(default="")
    image: StrictStr = Field(default="")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Match keys to fields ignoring case and drop nulls.

        A null field means the same as a missing one and leaves an earlier
        value in place. When several keys fold to the same field, the last
        one in the document wins.
        """
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            field = key.lower() if isinstance(key, str) else key
            if field in cls.model_fields and value is not None:
                normalized[field] = value
        return normalized


def decode_film(body: bytes) -> Film:
    """Decode a request body into a Film.

    Malformed UTF-8 is replaced with U+FFFD instead of failing, so that a bad
    text value is reported by the validator together with its field name.
    """
    text = body.decode("utf-8", errors="replace")
    try:
        return Film.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(str(e)) from e
