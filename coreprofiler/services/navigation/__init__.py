"""Navigation service module."""

from .actions import redirect_to_home
from .services import show_loader

__all__ = ['redirect_to_home', 'show_loader']
