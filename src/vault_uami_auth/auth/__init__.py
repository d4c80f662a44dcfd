"""
vault_uami_auth.auth

Authentication package.

Responsibilities:
- Value types exchanged with callers (`AuthConfig`, `SessionToken`).
- The `ClientAuthentication` seam and its implementations.
- The stage-tagged error taxonomy.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Transport construction lives in `vault_uami_auth.transport`; this package only consumes it.
