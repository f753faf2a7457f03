from loginapp_identity.application.ports.notifier import Notifier

__all__ = ["Notifier"]
