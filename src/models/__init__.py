# Import all models here to ensure proper initialization order

# First import the base model
from src.models.base import Base

# Then import the user, which the other models point to
from src.models.user import User

# Finally import models owned by a user
from src.models.mirror_config import MirrorConfig
from src.models.payment_history import PaymentHistory

# This ensures all models are loaded and SQLAlchemy can properly establish relationships
__all__ = [
    "Base",
    "User",
    "MirrorConfig",
    "PaymentHistory",
]
