"""Fixed storage keys."""

USER_ADDRESS = "user_address"
USER_COORDS = "user_coords"

PHARMACY_CACHE_DATA = "pharmacy_cache_data"
PHARMACY_CACHE_TIMESTAMP = "pharmacy_cache_timestamp"
PHARMACY_CACHE_REGION = "pharmacy_cache_region"

PHARMACY_CACHE_KEYS = (PHARMACY_CACHE_DATA, PHARMACY_CACHE_TIMESTAMP, PHARMACY_CACHE_REGION)
