from loginapp_identity.infrastructure.email.email_service import SMTPEmailNotifier

__all__ = ["SMTPEmailNotifier"]
