"""Services for the comic wizard."""

from .session_store import SessionStore, session_store
from .wizard_service import WizardService

__all__ = ["SessionStore", "session_store", "WizardService"]
