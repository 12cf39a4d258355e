"""Typed view of the core profiler context."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SkippedUserProfile(BaseModel):
    skipped: Literal[True] = True


class UserProfile(BaseModel):
    """Answers from the user profile step; the answer schema belongs to the view."""

    model_config = ConfigDict(extra="allow")

    skipped: Literal[False] = False


class Location(BaseModel):
    location: str


class BusinessInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    location: str


class LoaderHints(BaseModel):
    class_name: Optional[str] = None
    use_stages: Optional[str] = None
    stage_index: Optional[int] = None


class CoreProfilerContext(BaseModel):
    """
    Context of one core profiler run.

    The defaults are safe values used when steps or lookups fail; the values
    actually shown to the user are the steps' own business.
    """

    model_config = ConfigDict(extra="forbid")

    opt_in_data_sharing: bool = False
    user_profile: Union[SkippedUserProfile, UserProfile] = Field(default_factory=SkippedUserProfile)
    geolocated_location: Location = Field(default_factory=lambda: Location(location="US:CA"))
    business_info: BusinessInfo = Field(default_factory=lambda: BusinessInfo(location="US:CA"))
    extensions_available: List[Dict[str, Any]] = Field(default_factory=list)
    extensions_selected: List[str] = Field(default_factory=list)
    countries: Dict[str, str] = Field(default_factory=dict)
    loader: LoaderHints = Field(default_factory=LoaderHints)
