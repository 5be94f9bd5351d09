"""Internal constants shared across the library."""

BASE_URL = "https://owner-api.teslamotors.com"
STREAMING_BASE_URL = "https://streaming.vn.teslamotors.com"
MOCK_BASE_URL = "http://localhost:8080"
USER_AGENT = "pytesla"

GRANT_TYPE_PASSWORD = "password"

# Public owner-app client credentials.
CLIENT_ID = "e4a9949fcfa04068f59abb5a658f2bac0a3428e4652315490b659d5ab3f35a9e"
CLIENT_SECRET = "c75f14bbadc8bee3a7594412c31416f8300256d7668ea7e6e7f06727bfb9d220"

# ------------------------------------------------------------------
# Streaming columns, in the order the server emits them after the
# leading timestamp column.
# ------------------------------------------------------------------

STREAM_VALUES: tuple[str, ...] = (
    "speed",
    "odometer",
    "soc",
    "elevation",
    "est_heading",
    "est_lat",
    "est_lng",
    "power",
    "shift_state",
    "range",
    "est_range",
    "heading",
)
