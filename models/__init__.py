from .models_user import User
from .models import Program

__all__ = [
    "User",
    "Program",
]
