from django.urls import path

from app_console.views import (
    BulkActionView,
    ComposeView,
    DeleteView,
    FolderView,
    LoginView,
    LogoutView,
    MessageDetailView,
    StarView,
)

app_name = 'console'

urlpatterns = [
    # Session
    path('login/', LoginView.as_view(), name='login'),
    path('logout/', LogoutView.as_view(), name='logout'),

    # Mailbox
    path('', FolderView.as_view(), name='inbox'),
    path('compose/', ComposeView.as_view(), name='compose'),
    path('folder/<str:folder>/', FolderView.as_view(), name='folder'),
    path('folder/<str:folder>/bulk/', BulkActionView.as_view(), name='bulk'),
    path('folder/<str:folder>/message/<str:email_id>/', MessageDetailView.as_view(), name='message'),
    path('folder/<str:folder>/message/<str:email_id>/star/', StarView.as_view(), name='star'),
    path('folder/<str:folder>/message/<str:email_id>/delete/', DeleteView.as_view(), name='delete'),
]
