"""Song, pack and unlock lists and their on-disk documents."""

from arcbundle.core.songlist.models import (
    CharacterCondition,
    CharacterFormCondition,
    ChoiceCondition,
    ClearGrade,
    ClearRatingMultipleCondition,
    ClearSongCondition,
    ClearSongMultipleCondition,
    DifficultyConfigCondition,
    DifficultyInfo,
    FragmentCondition,
    LocalizationInfo,
    PackInfo,
    Packlist,
    PlaySongCondition,
    PotentialCondition,
    RatingClass,
    SongInfo,
    Songlist,
    SpecialCondition,
    StoryCondition,
    UnlockCondition,
    UnlockEntry,
    UnlockList,
)
from arcbundle.core.songlist.store import (
    PACKLIST_FILENAME,
    SONGLIST_FILENAME,
    UNLOCKS_FILENAME,
    SonglistFormatError,
    SonglistStore,
)

__all__ = [
    # Store
    "SonglistStore",
    "SonglistFormatError",
    "SONGLIST_FILENAME",
    "PACKLIST_FILENAME",
    "UNLOCKS_FILENAME",
    # Entities
    "SongInfo",
    "PackInfo",
    "UnlockEntry",
    "DifficultyInfo",
    "LocalizationInfo",
    "RatingClass",
    "ClearGrade",
    # Containers
    "Songlist",
    "Packlist",
    "UnlockList",
    # Unlock conditions
    "UnlockCondition",
    "FragmentCondition",
    "ClearSongCondition",
    "PlaySongCondition",
    "ClearSongMultipleCondition",
    "ChoiceCondition",
    "PotentialCondition",
    "ClearRatingMultipleCondition",
    "SpecialCondition",
    "CharacterCondition",
    "StoryCondition",
    "CharacterFormCondition",
    "DifficultyConfigCondition",
]
