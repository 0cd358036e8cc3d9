from app.services.event.event_service import EventService
from app.services.event.registration_service import RegistrationService
from app.services.event.admin_service import EventAdminService

__all__ = ["EventService", "RegistrationService", "EventAdminService"]
