# services/profile_scoring/definitions.py
# Static definitions for the thinking-component chart.

# Fixed order of the eight components around the octagram.
# Index 0 is drawn at the top, the rest clockwise.
CANONICAL_ORDER = [
    "self-identity",
    "self-esteem",
    "self-confidence",
    "self-agency",
    "self-assertiveness",
    "self-regulation",
    "self-motivation",
    "self-compassion",
]

DEFAULT_LABEL_WIDTH = 12

# Number of keys stored with a submission as its top components
TOP_COMPONENTS_LIMIT = 3

# Challenge bar: the highest possible score stops at the "normal" zone
CHALLENGE_BAR_FLOOR = 25.0
CHALLENGE_BAR_SPAN = 75.0
