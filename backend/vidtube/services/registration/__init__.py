from .dto import RegistrationIn
from .service import RegistrationService

__all__ = ["RegistrationIn", "RegistrationService"]
