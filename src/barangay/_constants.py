"""Internal constants shared across the library."""

DEFAULT_KEY_PREFIX = "profile:"
DEFAULT_STORE_URL = "redis://localhost:6379/0"
DEFAULT_PORT = 5000

#: Fields required on creation (checked by the HTTP layer, not the store).
REQUIRED_CREATE_FIELDS: tuple[str, ...] = ("name", "province", "captain")

# ------------------------------------------------------------------
# Demographic sub-groups  (wire name → counter wire names)
# ------------------------------------------------------------------

SUB_GROUPS: dict[str, tuple[str, str]] = {
    "gender": ("male", "female"),
    "employment": ("employed", "unemployed"),
    "fourPs": ("members", "nonMembers"),
}

#: Accepted spellings of sub-group names, mapped to the wire name.
SUB_GROUP_ALIASES: dict[str, str] = {
    "gender": "gender",
    "employment": "employment",
    "fourPs": "fourPs",
    "four_ps": "fourPs",
}

#: Accepted spellings of counter names, mapped to the wire name.
COUNTER_ALIASES: dict[str, str] = {
    "non_members": "nonMembers",
}

# ------------------------------------------------------------------
# Export
# ------------------------------------------------------------------

CSV_FIELDS: tuple[str, ...] = (
    "_id",
    "name",
    "province",
    "captain",
    "population",
    "budget",
    "male",
    "female",
    "employed",
    "unemployed",
    "fourPsMembers",
    "fourPsNonMembers",
)
