from dataclasses import dataclass

from bson import ObjectId


@dataclass(frozen=True)
class Actor:
    """The authenticated identity performing a request."""
    actor_id: ObjectId
    role: str
