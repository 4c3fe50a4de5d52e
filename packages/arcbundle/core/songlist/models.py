"""Song, pack and unlock list models.

These mirror the game's list documents closely enough to load and save them
without loss: every model accepts unknown keys and writes them back.

Unlock conditions are a closed union discriminated on the integer ``type``
field; a tag outside the known set fails validation.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class ListModel(BaseModel):
    """Base for list document models (extra keys round-trip)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class RatingClass(IntEnum):
    """Difficulty slot of a chart."""

    PAST = 0
    PRESENT = 1
    FUTURE = 2
    BEYOND = 3
    ETERNAL = 4


class ClearGrade(IntEnum):
    """Minimum clear grade required by a clear condition."""

    ANY = 0
    C = 1
    B = 2
    A = 3
    AA = 4
    EX = 5
    EX_PLUS = 6


class LocalizationInfo(ListModel):
    """Localized text; English is always present."""

    en: str = ""
    ja: str | None = None
    ko: str | None = None
    zh_hans: str | None = Field(default=None, alias="zh-Hans")
    zh_hant: str | None = Field(default=None, alias="zh-Hant")


class DifficultyInfo(ListModel):
    rating_class: RatingClass = Field(default=RatingClass.PAST, alias="ratingClass")
    chart_designer: str = Field(default="", alias="chartDesigner")
    jacket_designer: str = Field(default="", alias="jacketDesigner")
    rating: int = 0
    rating_plus: bool | None = Field(default=None, alias="ratingPlus")


class SongInfo(ListModel):
    """One songlist entry."""

    idx: int | None = None
    id: str
    title_localized: LocalizationInfo = Field(default_factory=LocalizationInfo)
    artist: str = ""
    bpm: str = ""
    # Integral tempos stay ints on save
    bpm_base: int | float = 0
    set: str = "base"
    purchase: str = ""
    audio_preview: int = Field(default=0, alias="audioPreview")
    audio_preview_end: int = Field(default=0, alias="audioPreviewEnd")
    side: int = 0
    bg: str = ""
    date: int = 0
    version: str = ""
    remote_dl: bool | None = None
    world_unlock: bool | None = None
    byd_local_unlock: bool | None = None
    difficulties: list[DifficultyInfo] = Field(default_factory=list)


class PackInfo(ListModel):
    """One packlist entry."""

    id: str
    section: str | None = None
    plus_character: int | None = None
    custom_banner: bool | None = None
    pack_parent: str | None = None
    name_localized: LocalizationInfo = Field(default_factory=LocalizationInfo)
    description_localized: LocalizationInfo = Field(default_factory=LocalizationInfo)


# Unlock conditions ----------------------------------------------------------


class FragmentCondition(ListModel):
    type: Literal[0] = 0
    credit: int = 0


class ClearSongCondition(ListModel):
    type: Literal[1] = 1
    song_id: str = ""
    song_difficulty: RatingClass = RatingClass.PAST
    grade: ClearGrade = ClearGrade.ANY


class PlaySongCondition(ListModel):
    type: Literal[2] = 2
    song_id: str = ""
    song_difficulty: RatingClass = RatingClass.PAST


class ClearSongMultipleCondition(ListModel):
    type: Literal[3] = 3
    song_id: str = ""
    song_difficulty: RatingClass = RatingClass.PAST
    grade: ClearGrade = ClearGrade.ANY
    times: int = 1


class ChoiceCondition(ListModel):
    type: Literal[4] = 4
    conditions: list[UnlockCondition] = Field(default_factory=list)


class PotentialCondition(ListModel):
    """Potential requirement, stored as potential × 100."""

    type: Literal[5] = 5
    rating: int = 0


class ClearRatingMultipleCondition(ListModel):
    type: Literal[6] = 6
    rating: int = 0
    rating_plus: bool | None = Field(default=None, alias="ratingPlus")
    count: int = 1


class SpecialCondition(ListModel):
    type: Literal[101] = 101
    min: int = 0
    max: int = 0


class CharacterCondition(ListModel):
    type: Literal[103] = 103
    id: int = 0


class StoryCondition(ListModel):
    type: Literal[104] = 104


class CharacterFormCondition(ListModel):
    type: Literal[105] = 105
    char_id: int = 0
    awakened: bool = False
    inverted: bool = False


class DifficultyConfigCondition(ListModel):
    type: Literal[106] = 106
    song_id: str = ""
    song_difficulty: RatingClass = RatingClass.PAST
    inverted: bool = False


UnlockCondition = Annotated[
    FragmentCondition
    | ClearSongCondition
    | PlaySongCondition
    | ClearSongMultipleCondition
    | ChoiceCondition
    | PotentialCondition
    | ClearRatingMultipleCondition
    | SpecialCondition
    | CharacterCondition
    | StoryCondition
    | CharacterFormCondition
    | DifficultyConfigCondition,
    Field(discriminator="type"),
]

ChoiceCondition.model_rebuild()


class UnlockEntry(ListModel):
    """Unlock conditions for one chart; any condition satisfies it."""

    song_id: str = Field(alias="songId")
    rating_class: RatingClass = Field(default=RatingClass.PAST, alias="ratingClass")
    conditions: list[UnlockCondition] = Field(default_factory=list)


# Containers -----------------------------------------------------------------


class Songlist(ListModel):
    songs: list[SongInfo] = Field(default_factory=list)


class Packlist(ListModel):
    packs: list[PackInfo] = Field(default_factory=list)


class UnlockList(ListModel):
    unlocks: list[UnlockEntry] = Field(default_factory=list)
