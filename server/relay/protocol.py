"""
Event names shared with the browser client.

Inbound events arrive from a single connection; outbound events are emitted
either back to that connection or to every other connection.
"""

ANONYMOUS = "Anonymous"

# Inbound (client -> server)
SET_NICKNAME = "set-nickname"
UPDATE_NICKNAME = "update-nickname"
LOCATION_UPDATE = "location-update"
STOP_SHARING = "stop-sharing"

INBOUND_EVENTS = (SET_NICKNAME, UPDATE_NICKNAME, LOCATION_UPDATE, STOP_SHARING)

# Outbound (server -> client)
ACTIVE_USERS = "active-users"
USER_JOINED = "user-joined"
NICKNAME_UPDATED = "nickname-updated"
USER_LOCATION = "user-location"
USER_LEFT = "user-left"


def normalize_nickname(value: object) -> str:
    """Strip a client-supplied nickname, falling back to ANONYMOUS when blank."""
    if not isinstance(value, str):
        return ANONYMOUS
    return value.strip() or ANONYMOUS
