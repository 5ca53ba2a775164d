"""
directory_auth.rpc

Remote call boundary to the directory's security server.

Responsibilities:
- Wire shapes for requests/responses (`rpc.wire`).
- The httpx transport that turns every failure into `RemoteCallError` (`rpc.http`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing above this package knows about HTTP status codes or JSON envelopes.
