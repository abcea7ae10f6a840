"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.notification_service import LogOnlyNotificationService

__all__ = ["LogOnlyNotificationService"]
