from app.db.models.user import User
from app.db.models.node import Node

__all__ = [
    "User",
    "Node"
]
