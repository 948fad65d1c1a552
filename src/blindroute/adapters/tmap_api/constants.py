"""Constants for the TMap public transit API adapter."""

TMAP_TRANSIT_URL = "https://apis.openapi.sk.com/transit/routes"

DEFAULT_RESULT_COUNT = 10
LANG_KOREAN = 0
RESPONSE_FORMAT = "json"
