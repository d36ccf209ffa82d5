from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class CheckStatus(str, Enum):
    """Outcome of an image inspection."""
    OK = "ok"
    BROKEN = "broken"
    NOT_FOUND = "not found"


class MatchType(str, Enum):
    """How the target image was located on the page."""
    BASE_PATH = "base_path_match"   # src contains the query-stripped reference
    FILENAME = "filename_match"     # src contains only the last path segment
    EXACT = "exact_match"           # src attribute equals the reference (legacy policy)


class MatchPolicy(str, Enum):
    """Lookup strategy for the target image."""
    SUBSTRING = "substring"
    EXACT = "exact"


# --- In-page snapshot (camelCase keys as produced by the page script) ---


class BoundingBox(BaseModel):
    width: float = 0.0
    height: float = 0.0
    x: float = 0.0
    y: float = 0.0


class ImageSnapshot(BaseModel):
    """
    One <img> element as seen inside the page.
    Populated from the page script's plain record; no live DOM references.
    """
    model_config = ConfigDict(populate_by_name=True)

    src: str = ""                                   # resolved (absolute) source
    src_attribute: Optional[str] = Field(None, alias="srcAttribute")
    alt: str = ""
    class_name: str = Field("", alias="className")
    complete: bool = False
    natural_width: int = Field(0, alias="naturalWidth")
    natural_height: int = Field(0, alias="naturalHeight")
    display: str = ""
    visibility: str = ""
    opacity: str = "1"                              # computed style value, as a string
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")

    def describe(self) -> "ImageDescriptor":
        return ImageDescriptor(src=self.src, alt=self.alt, class_name=self.class_name)


class ImageDescriptor(BaseModel):
    """Debug listing entry for an image present on the page."""
    src: str
    alt: str = ""
    class_name: str = ""


# --- Inspection result ---


class InspectionResult(BaseModel):
    """
    Plain record describing what the inspector found.
    Diagnostic fields are filled regardless of verdict.
    """
    status: CheckStatus
    searched_for: str
    base_path: str
    searched_filename: str
    match_type: Optional[MatchType] = None
    image: Optional[ImageSnapshot] = None
    failures: List[str] = Field(
        default_factory=list,
        description="Visibility conditions that did not hold"
    )
    all_images: List[ImageDescriptor] = Field(
        default_factory=list,
        description="Every image on the page, in document order (not found only)"
    )

    @property
    def is_ok(self) -> bool:
        return self.status == CheckStatus.OK
