"""
Core Deployment Components.

Contains the fundamental building blocks of a deployment run,
separated from the Azure-specific repositories and services.

Structure:
    models/: Pure data structures (no business logic)
    logic/: Readiness poller, retry coordinator, state transitions
    errors.py: Error codes and retry classification
"""

from . import models
from . import logic

__all__ = [
    'models',
    'logic',
]
