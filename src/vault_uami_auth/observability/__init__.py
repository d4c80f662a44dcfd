"""
vault_uami_auth.observability

Observability package.

Responsibilities:
- Structured logging configuration.
"""

# Package marker.
