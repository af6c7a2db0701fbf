"""
Profile rank ("level") calculation for member profiles.

A profile climbs four ranks as sections are filled in:

  1. Basic Information      - nickname + email, always done once signed up
  2. General Profile        - name, gender, date of birth, postcode
  3. Demographic & Lifestyle - interests, occupation, household, ...
  4. Verification           - identity document approved by an admin

The result is recomputed from the record on every call and never stored.
"""
from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Callable, Optional

BASIC = "Basic Information"
GENERAL = "General Profile"
DEMOGRAPHIC = "Demographic & Lifestyle"
VERIFICATION = "Verification"

BASIC_FIELDS = ("nickname", "email")

GENERAL_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "date_of_birth",
    "postcode",
)

DEMOGRAPHIC_FIELDS = (
    "interests",
    "hobbies",
    "occupation",
    "marital_status",
    "income_range",
    "education",
    "ethnicity",
    "languages_spoken",
    "home_ownership",
    "vehicle_ownership",
    "pet_ownership",
)

VERIFIED = "approved"

FIELD_LABELS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "date_of_birth": "Date of Birth",
    "marital_status": "Marital Status",
    "income_range": "Income Range",
    "languages_spoken": "Languages Spoken",
    "home_ownership": "Home Ownership",
    "vehicle_ownership": "Vehicle Ownership",
    "pet_ownership": "Pet Ownership",
}

VERIFICATION_STEPS = [
    "Complete identity verification to reach Rank 4:",
    "• Upload identification document (Passport or Driver's License)",
    "• Wait for admin approval",
]

RANK_3_WARNING = (
    "You must complete Rank 2 (General Profile) before you can advance "
    "to Rank 3 (Demographic & Lifestyle)."
)
RANK_4_WARNING = (
    "You must complete Rank 3 (Demographic & Lifestyle) before you can advance "
    "to Rank 4 (Verification)."
)

DEFAULT_BADGE_COLOR = "bg-gray-100 text-gray-800 border-gray-200"
BADGE_COLORS = {
    1: DEFAULT_BADGE_COLOR,
    2: "bg-blue-100 text-blue-800 border-blue-200",
    3: "bg-green-100 text-green-800 border-green-200",
    4: "bg-purple-100 text-purple-800 border-purple-200",
}

DEFAULT_PROGRESS_BAR_COLOR = "bg-gray-500"
PROGRESS_BAR_COLORS = {
    1: DEFAULT_PROGRESS_BAR_COLOR,
    2: "bg-blue-500",
    3: "bg-green-500",
    4: "bg-purple-500",
}


@dataclass
class TierResult:
    level: int
    next_level_requirements: list[str] = field(default_factory=list)
    completed_sections: list[str] = field(default_factory=list)
    incomplete_sections: list[str] = field(default_factory=list)
    can_advance_to_level3: bool = False
    can_advance_to_level4: bool = False
    warning_message: Optional[str] = None

    @property
    def progress(self) -> int:
        return 25 * self.level

    def to_dict(self) -> dict:
        """JSON shape consumed by the dashboard front end."""
        return {
            "level": self.level,
            "progress": self.progress,
            "nextLevelRequirements": list(self.next_level_requirements),
            "completedSections": list(self.completed_sections),
            "incompleteSections": list(self.incomplete_sections),
            "canAdvanceToLevel3": self.can_advance_to_level3,
            "canAdvanceToLevel4": self.can_advance_to_level4,
            "warningMessage": self.warning_message,
        }


def get_field(record, name: str) -> Any:
    """Read a field from a dict-like record or a model row. Missing -> None."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def is_field_complete(value) -> bool:
    if value is None:
        return False

    if isinstance(value, str):
        return value.strip() != ""

    # list columns need at least one real (non-blank) entry
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(isinstance(item, str) and item.strip() != "" for item in value)

    return True


def format_field_name(name: str) -> str:
    label = FIELD_LABELS.get(name)
    if label:
        return label
    if not name:
        return name
    return name[0].upper() + name[1:].replace("_", " ")


def _bullets(fields) -> list[str]:
    return [f"• {format_field_name(f)}" for f in fields]


@dataclass
class _Completion:
    """Per-section completion snapshot for one record."""
    missing_general: list[str]
    missing_demographic: list[str]
    verified: bool

    @property
    def general(self) -> bool:
        return not self.missing_general

    @property
    def demographic(self) -> bool:
        return not self.missing_demographic


def _check(record) -> _Completion:
    return _Completion(
        missing_general=[f for f in GENERAL_FIELDS if not is_field_complete(get_field(record, f))],
        missing_demographic=[f for f in DEMOGRAPHIC_FIELDS if not is_field_complete(get_field(record, f))],
        verified=get_field(record, "verification_status") == VERIFIED,
    )


def _rank_4(c: _Completion) -> TierResult:
    return TierResult(
        level=4,
        completed_sections=[BASIC, GENERAL, DEMOGRAPHIC, VERIFICATION],
        can_advance_to_level3=True,
        can_advance_to_level4=True,
    )


def _rank_3(c: _Completion) -> TierResult:
    return TierResult(
        level=3,
        next_level_requirements=list(VERIFICATION_STEPS),
        completed_sections=[BASIC, GENERAL, DEMOGRAPHIC],
        incomplete_sections=[VERIFICATION],
        can_advance_to_level3=True,
        can_advance_to_level4=True,
    )


def _rank_2(c: _Completion) -> TierResult:
    result = TierResult(
        level=2,
        completed_sections=[BASIC, GENERAL],
        can_advance_to_level3=True,
        can_advance_to_level4=False,
    )
    if c.missing_demographic:
        result.next_level_requirements = [
            "Complete all Demographic & Lifestyle fields:",
            *_bullets(c.missing_demographic),
        ]
        result.incomplete_sections = [DEMOGRAPHIC]
    return result


def _rank_1(c: _Completion) -> TierResult:
    result = TierResult(level=1, completed_sections=[BASIC])

    if c.missing_general:
        result.next_level_requirements = [
            "Complete all General Profile fields to reach Rank 2:",
            *_bullets(c.missing_general),
        ]
        result.incomplete_sections = [GENERAL]
        if c.missing_demographic:
            result.incomplete_sections.append(DEMOGRAPHIC)

    if not c.general:
        result.warning_message = RANK_3_WARNING

    return result


# Checked top to bottom, first match wins. Order matters: each rule assumes
# every rule above it failed.
RANK_RULES: list[tuple[Callable[[_Completion], bool], Callable[[_Completion], TierResult]]] = [
    (lambda c: c.general and c.demographic and c.verified, _rank_4),
    (lambda c: c.general and c.demographic, _rank_3),
    (lambda c: c.general, _rank_2),
    (lambda c: True, _rank_1),
]


def calculate_profile_level(record) -> TierResult:
    """
    Work out the rank of a profile record (dict or Profile row, or None).

    Never raises: missing or malformed fields just count as incomplete.
    """
    completion = _check(record)

    result = None
    for matches, build in RANK_RULES:
        if matches(completion):
            result = build(completion)
            break

    # Only fills the slot if the rank-3 warning didn't already claim it
    if not result.can_advance_to_level4 and result.level < 3 and not result.warning_message:
        result.warning_message = RANK_4_WARNING

    return result


def badge_color_for(level) -> str:
    return BADGE_COLORS.get(level, DEFAULT_BADGE_COLOR)


def progress_bar_color_for(level) -> str:
    return PROGRESS_BAR_COLORS.get(level, DEFAULT_PROGRESS_BAR_COLOR)


def profile_level_payload(record) -> dict:
    """Rank info plus the color tokens the dashboard needs."""
    result = calculate_profile_level(record)
    payload = result.to_dict()
    payload["badgeColor"] = badge_color_for(result.level)
    payload["progressBarColor"] = progress_bar_color_for(result.level)
    return payload
