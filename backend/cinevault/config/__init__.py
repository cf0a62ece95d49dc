from cinevault.config.paths import *
from cinevault.config.collection import *

VERSION = "0.1.0"
APP_TITLE = "CineVault"
APP_DESCRIPTION = "Personal movie collection manager backed by OMDb"


def validate_config():
    if MIN_USER_RATING >= MAX_USER_RATING:
        raise ValueError("MIN_USER_RATING must be less than MAX_USER_RATING")
    if MIN_FLAVOR_LEVEL >= MAX_FLAVOR_LEVEL:
        raise ValueError("MIN_FLAVOR_LEVEL must be less than MAX_FLAVOR_LEVEL")
    if DEFAULT_SORT_KEY not in SORT_KEYS:
        raise ValueError("DEFAULT_SORT_KEY must be one of SORT_KEYS")


validate_config()
