"""
Page Inspector Stage - Checks that the target image is present and visible.

INPUT:
  - page (logged-in session)
  - config.target_url, target_image, settle_ms, match_policy

OUTPUT:
  - result: InspectionResult (ok | broken | not found)

The page script takes the image reference and hands back one plain record:
the reference it was given plus a snapshot of every <img> element. Matching
and the visibility verdict then run here, on that record, rather than inside
the page, so the same rules apply to any snapshot without a browser.
"""

from typing import Any, Dict, List, Optional, Tuple

from imgcheck.core.base_stage import BaseStage
from imgcheck.core.contracts import RunContext, StageConfig, StageOutput
from imgcheck.core.session import NAVIGATION_TIMEOUT_MS
from imgcheck.schema import (
    CheckStatus,
    ImageSnapshot,
    InspectionResult,
    MatchPolicy,
    MatchType,
)

# Evaluated inside the page with the image reference as its only argument.
# Returns a single record; images are listed in document order.
SNAPSHOT_SCRIPT = """
(reference) => ({
  searchedFor: reference,
  images: Array.from(document.querySelectorAll('img')).map((img) => {
    const style = window.getComputedStyle(img);
    const rect = img.getBoundingClientRect();
    return {
      src: img.src || '',
      srcAttribute: img.getAttribute('src'),
      alt: img.alt || '',
      className: typeof img.className === 'string' ? img.className : '',
      complete: img.complete,
      naturalWidth: img.naturalWidth,
      naturalHeight: img.naturalHeight,
      display: style.display,
      visibility: style.visibility,
      opacity: style.opacity,
      boundingBox: { width: rect.width, height: rect.height, x: rect.x, y: rect.y },
    };
  }),
})
"""


def split_reference(reference: str) -> Tuple[str, str]:
    """Return (base_path, filename) for an image reference."""
    base_path = reference.split("?", 1)[0]
    filename = base_path.split("/")[-1]
    return base_path, filename


def find_image(
    images: List[ImageSnapshot],
    reference: str,
    policy: MatchPolicy = MatchPolicy.SUBSTRING,
) -> Tuple[Optional[ImageSnapshot], Optional[MatchType]]:
    """
    Locate the target image.

    substring: first src containing the base path, else first src containing
    the filename. exact: first src attribute equal to the reference.
    """
    if policy == MatchPolicy.EXACT:
        for image in images:
            if image.src_attribute == reference:
                return image, MatchType.EXACT
        return None, None

    base_path, filename = split_reference(reference)

    for image in images:
        if image.src and base_path in image.src:
            return image, MatchType.BASE_PATH

    if filename:
        for image in images:
            if image.src and filename in image.src:
                return image, MatchType.FILENAME

    return None, None


def _opacity(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def visibility_failures(image: ImageSnapshot) -> List[str]:
    """Names of the visibility conditions the image violates."""
    checks = [
        ("complete", image.complete),
        ("naturalWidth > 0", image.natural_width > 0),
        ("naturalHeight > 0", image.natural_height > 0),
        ("display != none", image.display != "none"),
        ("visibility != hidden", image.visibility != "hidden"),
        ("opacity > 0", _opacity(image.opacity) > 0),
        ("boundingBox.width > 0", image.bounding_box.width > 0),
        ("boundingBox.height > 0", image.bounding_box.height > 0),
    ]
    return [name for name, passed in checks if not passed]


def evaluate_snapshot(
    raw_images: List[Dict[str, Any]],
    reference: str,
    policy: MatchPolicy = MatchPolicy.SUBSTRING,
) -> InspectionResult:
    """Turn the page's raw snapshot into an InspectionResult."""
    images = [ImageSnapshot.model_validate(raw) for raw in raw_images or []]
    base_path, filename = split_reference(reference)

    image, match_type = find_image(images, reference, policy)
    if image is None:
        return InspectionResult(
            status=CheckStatus.NOT_FOUND,
            searched_for=reference,
            base_path=base_path,
            searched_filename=filename,
            all_images=[i.describe() for i in images],
        )

    failures = visibility_failures(image)
    return InspectionResult(
        status=CheckStatus.BROKEN if failures else CheckStatus.OK,
        searched_for=reference,
        base_path=base_path,
        searched_filename=filename,
        match_type=match_type,
        image=image,
        failures=failures,
    )


class PageInspectorStage(BaseStage):

    @classmethod
    def get_config(cls) -> StageConfig:
        return StageConfig(
            stage_name="page_inspector",
            display_name="Page Inspector",
            description="Navigates to the target page and judges the target image",
        )

    async def process(self, ctx: RunContext) -> StageOutput:
        config = ctx.config
        page = ctx.page

        await page.goto(config.target_url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
        # networkidle does not cover images loaded after scripts run
        await page.wait_for_timeout(config.settle_ms)
        self._log("Target page loaded, checking image...")

        snapshot = await page.evaluate(SNAPSHOT_SCRIPT, config.target_image)
        raw_images = (snapshot or {}).get("images") or []
        self._add_note(f"Images on page: {len(raw_images)}")

        result = evaluate_snapshot(raw_images, config.target_image, config.match_policy)
        return StageOutput(
            state_updates={"result": result},
            verification_notes=[f"Image check: {result.status.value}"],
        )
