"""Constants for the DB Timetables API adapter.

Uses the DB API Marketplace Timetables API (planned data only).
API Documentation: https://developers.deutschebahn.com/db-api-marketplace/apis/product/timetables

Authentication via DB-Client-Id and DB-Api-Key headers.
"""

DB_TIMETABLES_BASE_URL = "https://apis.deutschebahn.com/db-api-marketplace/apis/timetables/v1"

# Name under which the shared rate limiter is registered; plan and station
# lookups count against the same quota.
DB_TIMETABLES_API_NAME = "db_timetables"

# Minimum spacing between two requests across the whole process
DB_API_MIN_DELAY_SECONDS = 0.02

# HTTP headers
ACCEPT_XML = "application/xml"
CLIENT_ID_HEADER = "DB-Client-Id"
API_KEY_HEADER = "DB-Api-Key"

# Separator of station names in the planned path (ppth) attribute
PLANNED_PATH_SEPARATOR = "|"
