"""SQLAlchemy Base class and model registry."""
from hostelcare.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from hostelcare.models import CleaningLog, CleaningLogTask, Issue, User, Worker  # noqa: F401


import_models()
