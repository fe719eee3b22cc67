"""Static preset catalog shipped with the SDK.

The live catalog comes from the discovery document; this table seeds the
registry so common presets resolve without a network call.
"""

from __future__ import annotations

from enum import Enum

PRESET_SCOPE_PREFIX = "hp:presets."
SCOPE_NAMESPACE_PREFIX = "hp:"


class PresetScope(str, Enum):
    """OAuth scopes of the built-in presets."""

    IS_HUMAN = "hp:presets.is_human"
    IS_18_PLUS = "hp:presets.is_18_plus"
    IS_21_PLUS = "hp:presets.is_21_plus"
    IS_ACCREDITED_INVESTOR = "hp:presets.is_accredited_investor"
    IS_QUALIFIED_PURCHASER = "hp:presets.is_qualified_purchaser"
    IS_INSTITUTIONAL_INVESTOR = "hp:presets.is_institutional_investor"
    PALM_VERIFIED = "hp:presets.palm_verified"
    AGE_GATE_ALCOHOL = "hp:presets.age_gate_alcohol"
    AGE_GATE_GAMBLING = "hp:presets.age_gate_gambling"
    INVESTMENT_GATE = "hp:presets.investment_gate"


# Wire name -> scope
PRESET_SCOPE_MAP: dict[str, str] = {
    scope.value[len(PRESET_SCOPE_PREFIX):]: scope.value for scope in PresetScope
}


class PresetErrorCode(str, Enum):
    """Error codes the API reports for individual presets."""

    E4003 = "E4003"
    E4004 = "E4004"
    E4010 = "E4010"
    E4041 = "E4041"
    E4042 = "E4042"
    E4044 = "E4044"


PRESET_STATUSES = ("valid", "expired", "pending", "unavailable")
AUTHORIZATION_STATUSES = ("active", "revoked")
PRESET_TYPES = (
    "string",
    "number",
    "boolean",
    "integer",
    "date",
    "datetime",
    "array",
    "enum",
    "bundled",
)
