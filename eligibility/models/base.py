# Re-export the main Base class from db.py for eligibility models
# so every table shares one metadata with the core models
from db import Base

__all__ = ["Base"]
