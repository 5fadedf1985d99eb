from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from models.geometry_type import GeometryType


def geometry_type_validator(value: Any) -> Any:
    """
    Resolve a geometry name case-insensitively.

    Non-string values are left for strict type validation to reject.
    """

    if not isinstance(value, str):
        return value

    try:
        return GeometryType.from_name(value)
    except KeyError:
        raise ValueError(f'Unknown geometry {value!r}') from None


class LocationSet(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    include: list[str] = []
    exclude: list[str] = []


class IDPreset(BaseModel):
    """
    Raw preset entry as found in the iD tagging schema presets.json.

    Only the structure is checked here; see id_presets_parser for the policy checks.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    tags: dict[str, str]
    geometry: list[Annotated[GeometryType, BeforeValidator(geometry_type_validator)]]
    name: str
    suggestion: bool = False
    icon: str = ''
    image_url: str = Field('', alias='imageURL')
    terms: list[str] = []
    location_set: LocationSet | None = Field(None, alias='locationSet')
    searchable: bool = True
    match_score: float = Field(1.0, alias='matchScore')
    add_tags: dict[str, str] | None = Field(None, alias='addTags')
    remove_tags: dict[str, str] | None = Field(None, alias='removeTags')

    @field_validator('location_set', 'add_tags', 'remove_tags', mode='before')
    @classmethod
    def _present_not_null(cls, value: Any) -> Any:
        # absence falls back to defaults, an explicit null is a type error
        if value is None:
            raise ValueError('Must not be null')
        return value
