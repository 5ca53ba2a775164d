"""
directory_auth.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Safe representations of secrets/tokens for log events.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The client accepts an injected logger, so embedding services keep their own setup.
