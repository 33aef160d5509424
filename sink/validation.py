import re
from datetime import date
from typing import Optional

from sink.errors import RecordValidationError
from sink.models import Film

FIRST_FILM_YEAR = 1888
MIN_POPULARITY = 0
MAX_POPULARITY = 100
AWARDS = ("", "Yes", "No")
IMAGE_PATTERN = re.compile(r".+\.(png|jpg|jpeg)\Z")

# checked for well-formedness in this order
TEXT_FIELDS = ("title", "subject", "actor", "actress", "director", "awards", "image")


def validate_film(film: Film, today: Optional[date] = None) -> None:
    """Check a decoded film and raise RecordValidationError on the first broken rule.

    The rules run in a fixed order so the same film always gets the same
    message. ``today`` sets the latest accepted year; it defaults to the
    current date.
    """
    if not film.title:
        raise RecordValidationError("title", "title is required")

    current_year = (today or date.today()).year
    if not FIRST_FILM_YEAR <= film.year <= current_year:
        raise RecordValidationError(
            "year",
            f"year must be between {FIRST_FILM_YEAR} and {current_year} (inclusive)"
        )

    # NaN fails the comparison as well
    if not MIN_POPULARITY <= film.popularity <= MAX_POPULARITY:
        raise RecordValidationError(
            "popularity",
            f"popularity must be between {MIN_POPULARITY} and {MAX_POPULARITY} (inclusive)"
        )

    if film.awards not in AWARDS:
        raise RecordValidationError("awards", 'awards must be "Yes", "No" or empty')

    if film.image and not IMAGE_PATTERN.search(film.image):
        raise RecordValidationError(
            "image",
            f"image value doesn't match the pattern {IMAGE_PATTERN.pattern!r}: {film.image}"
        )

    for field in TEXT_FIELDS:
        check_text(field, getattr(film, field))


def invalid_char_offset(value: str) -> int:
    """Return the UTF-8 byte offset of the first invalid character, or -1."""
    for index, char in enumerate(value):
        if char == "\ufffd" or "\ud800" <= char <= "\udfff":
            return len(value[:index].encode("utf-8"))
    return -1


def check_text(field: str, value: str) -> None:
    offset = invalid_char_offset(value)
    if offset != -1:
        raise RecordValidationError(
            field,
            f"value for {field} contains an invalid character at position {offset}: {value}"
        )
