# User rating bounds, inclusive
MIN_USER_RATING = 1
MAX_USER_RATING = 5

# Genre flavor levels (laugh meter, scare level, ...) are clamped to this range
MIN_FLAVOR_LEVEL = 0
MAX_FLAVOR_LEVEL = 10

# Accepted sortCollection keys, in the order the UI offers them
SORT_KEYS = ("title", "year", "rating", "dateAdded")
DEFAULT_SORT_KEY = "title"

PLACEHOLDER_POSTER = "https://via.placeholder.com/300x450?text=No+Poster"

# OMDb uses this marker for every missing field
MISSING_VALUE = "N/A"
