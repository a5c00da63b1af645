"""
Centralized constants for the signed request pipeline.

Values here are part of the wire contract with the remote verifier.
Changing any of them invalidates every signature produced by the client.
"""

# ==============================================================================
# SIGNING
# ==============================================================================

SIGNATURE_METHOD = "HmacSHA256"
SIGNATURE_VERSION = "2"

# Form encoding used for both signed bodies and GET query strings
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# ==============================================================================
# RETRY POLICY
# ==============================================================================

# Hourly request quota resets on the hour, so a quota hit waits a full hour
QUOTA_EXCEEDED_BACKOFF_SECONDS = 60 * 60

# ==============================================================================
# REGIONS
# ==============================================================================

AREA_CODES = (
    "BR", "CA", "MX", "AE", "DE", "ES", "FR", "GB",
    "IN", "IT", "TR", "AU", "JP", "CN", "US",
)

DEFAULT_AREA = "US"

# ==============================================================================
# BATCHING
# ==============================================================================

# GetOrder accepts at most 50 order ids per call
GET_ORDER_MAX_IDS = 50
