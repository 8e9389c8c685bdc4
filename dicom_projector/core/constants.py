"""Shared constants for DICOM metadata projection.

Value representation codes the projector treats specially, limits, and
the built-in header-summary tag allow-list.
"""

from __future__ import annotations

from typing import Final

from .tags import Tag

# =============================================================================
# Value Representations
# =============================================================================

#: Integer String, decimal ASCII integers
VR_INTEGER_STRING: Final[str] = "IS"

#: Decimal String, decimal ASCII floating point numbers
VR_DECIMAL_STRING: Final[str] = "DS"

#: Sequence of Items
VR_SEQUENCE: Final[str] = "SQ"

#: Bulk binary codes whose values can be suppressed from output
BULK_BINARY_VRS: Final[frozenset[str]] = frozenset({"OB", "OW"})

#: VRs whose values the decoder hands over as raw bytes
BINARY_VRS: Final[frozenset[str]] = frozenset(
    {"OB", "OD", "OF", "OL", "OV", "OW", "UN"}
)

# =============================================================================
# Limits
# =============================================================================

#: Default maximum sequence nesting depth before projection fails
DEFAULT_MAX_DEPTH: Final[int] = 64

#: Smallest accepted depth limit; 0 allows no nested datasets
MIN_MAX_DEPTH: Final[int] = 0

#: Largest signed 64-bit integer accepted from an IS value
INT64_MAX: Final[int] = 2**63 - 1

#: Smallest signed 64-bit integer accepted from an IS value
INT64_MIN: Final[int] = -(2**63)

# =============================================================================
# Default Metadata Tag Filter
# Header summary: file meta, study/series identity, patient, acquisition
# parameters, image geometry and the common vendor private creators.
# =============================================================================

DEFAULT_METADATA_TAGS: Final[tuple[Tag, ...]] = tuple(
    Tag.from_string(key)
    for key in (
        "00020002", "00020003", "00020010", "00020012", "00020013", "00020016",
        "00080005", "00080008", "00080012", "00080013", "00080016", "00080018",
        "00080020", "00080021", "00080022", "00080023", "00080030", "00080031",
        "00080032", "00080033", "00080050", "00080054", "00080060", "00080070",
        "00080080", "00080090", "00081010", "00081030", "0008103E", "00081060",
        "00081070", "00081090", "00090010", "00100010", "00100020", "00100030",
        "00100040", "00101001", "00101010", "001021B0", "00180010", "00180022",
        "00180050", "00180060", "00180090", "00181020", "00181030", "00181040",
        "00181100", "00181110", "00181111", "00181120", "00181130", "00181140",
        "00181150", "00181151", "00181152", "00181170", "00181190", "00181210",
        "00185100", "00190010", "0020000D", "0020000E", "00200010", "00200011",
        "00200012", "00200013", "00200032", "00200037", "00200052", "00201040",
        "00201041", "00210010", "00230010", "00270010", "00280002", "00280004",
        "00280010", "00280011", "00280030", "00280100", "00280101", "00280102",
        "00280103", "00280120", "00281050", "00281051", "00281052", "00281053",
        "00430010", "00450010", "00490010",
    )
)
