from coverwise.models.user import User
from coverwise.models.recommendation import Recommendation

__all__ = [
    "Recommendation",
    "User",
]
