import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from multical.calendars import CalendarSystem, system_for_kind
from multical.exceptions import InvalidArgumentError, InvalidFormatError
from multical.utils.format_utils import check_pattern

logger = logging.getLogger(__name__)

PROFILE_PREFIX = "calendar_"
PROFILE_SUFFIX = ".json"
PROFILES_DIR_ENV = "MULTICAL_PROFILES_DIR"
BUNDLED_PROFILES_DIR = Path(__file__).resolve().parent / "resources"


class CalendarProfile(BaseModel):
    """Formats and calendar kind for one calendar identifier."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Calendar identifier, e.g. 'khorshidi'")
    calendar_kind: Literal["gregorian", "persian", "islamic-umalqura"] = Field(
        ..., description="Calendar system implementing the arithmetic"
    )
    date_pattern_1: str = Field("%Y-%m-%d", description="Machine-readable date pattern")
    date_pattern_2: str = Field(..., description="Human-readable, localized date pattern")
    date_time_pattern_1: str = Field("%Y-%m-%dT%H:%M:%S", description="Machine-readable date-time pattern")
    date_time_pattern_2: str = Field(..., description="Human-readable, localized date-time pattern")
    description: Optional[str] = None

    @field_validator("date_pattern_1", "date_pattern_2", "date_time_pattern_1", "date_time_pattern_2")
    @classmethod
    def _known_directives(cls, v: str) -> str:
        try:
            return check_pattern(v)
        except (InvalidArgumentError, InvalidFormatError) as exc:
            raise ValueError(str(exc)) from exc


def _profile_id(path: Path) -> str:
    return path.name[len(PROFILE_PREFIX):-len(PROFILE_SUFFIX)]


def load_profile(path: Union[str, Path]) -> CalendarProfile:
    """Read one `calendar_<id>.json` file; the id comes from the file name."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidFormatError(f"profile {path.name} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidFormatError(f"profile {path.name} must hold a JSON object")
    data.setdefault("id", _profile_id(path))
    try:
        return CalendarProfile.model_validate(data)
    except ValidationError as exc:
        raise InvalidFormatError(f"profile {path.name} is invalid: {exc}") from exc


class CalendarProfileRegistry:
    """
    Read-only map of calendar id -> profile.

    Built once and passed to whoever needs it; there is no module-level
    instance. Lookups never mutate state, so a registry can be shared across
    threads without locking.
    """

    def __init__(self, profiles: Union[Mapping[str, CalendarProfile], List[CalendarProfile]]):
        if not isinstance(profiles, Mapping):
            profiles = {p.id: p for p in profiles}
        self._profiles: Mapping[str, CalendarProfile] = MappingProxyType(dict(profiles))
        self._systems: Mapping[str, CalendarSystem] = MappingProxyType(
            {pid: system_for_kind(p.calendar_kind) for pid, p in self._profiles.items()}
        )
        logger.debug("🗂️  Calendar profiles: %s", ", ".join(sorted(self._profiles)) or "∅")

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "CalendarProfileRegistry":
        directory = Path(directory)
        if not directory.is_dir():
            raise InvalidArgumentError(f"profile directory {str(directory)!r} does not exist")
        files = sorted(directory.glob(f"{PROFILE_PREFIX}*{PROFILE_SUFFIX}"))
        logger.debug("🔍 Loading %d profile file(s) from %s", len(files), directory)
        profiles: Dict[str, CalendarProfile] = {}
        for path in files:
            profile = load_profile(path)
            profiles[profile.id] = profile
        return cls(profiles)

    @classmethod
    def default(cls) -> "CalendarProfileRegistry":
        """Bundled profiles, or the directory named by $MULTICAL_PROFILES_DIR."""
        return cls.from_directory(os.getenv(PROFILES_DIR_ENV) or BUNDLED_PROFILES_DIR)

    def ids(self) -> List[str]:
        return sorted(self._profiles)

    def __contains__(self, calendar_id: object) -> bool:
        return calendar_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def resolve(self, calendar_id: Optional[str]) -> CalendarProfile:
        if not calendar_id:
            raise InvalidArgumentError("calendar id should not be empty or None")
        try:
            return self._profiles[calendar_id]
        except KeyError:
            raise InvalidArgumentError(
                f"unknown calendar id {calendar_id!r}; known: {self.ids()}"
            ) from None

    def system_for(self, calendar_id: Optional[str]) -> CalendarSystem:
        self.resolve(calendar_id)
        return self._systems[calendar_id]
