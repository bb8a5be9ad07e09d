from .config import ProfessionalFormatter, configure_logging

__all__ = ["ProfessionalFormatter", "configure_logging"]
