# Services Module
from .notifications import Notifier, Toast, ToastCenter, ToastType

__all__ = ["Notifier", "Toast", "ToastCenter", "ToastType"]
