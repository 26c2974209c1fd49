from .webmail_view import (
    BulkActionView,
    ComposeView,
    DeleteView,
    FolderView,
    LoginView,
    LogoutView,
    MessageDetailView,
    StarView,
)

__all__ = [
    'BulkActionView',
    'ComposeView',
    'DeleteView',
    'FolderView',
    'LoginView',
    'LogoutView',
    'MessageDetailView',
    'StarView',
]
