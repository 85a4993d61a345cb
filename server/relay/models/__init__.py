from relay.models.participant import Location, Participant

__all__ = [
    "Location",
    "Participant",
]
