"""Constants for the HTTP rules provider."""

RULES_ENDPOINT = "/data/rules.json"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pytollcalculator",
}
