from django.urls import path

from app_webmail.views.auth_view import LoginView, LogoutView
from app_webmail.views.email_view import (
    EmailListView,
    EmailDetailView,
    EmailSendView,
    EmailReadView,
    EmailStarView,
)
from app_webmail.views.folder_view import FolderListView
from app_webmail.views.user_view import UserInfoView

app_name = 'webmail'

urlpatterns = [
    # Sign in / out
    path('auth/login', LoginView.as_view(), name='auth-login'),
    path('auth/logout', LogoutView.as_view(), name='auth-logout'),
    # Messages (send before <email_id>)
    path('protected/emails', EmailListView.as_view(), name='email-list'),
    path('protected/emails/send', EmailSendView.as_view(), name='email-send'),
    path('protected/emails/<str:email_id>', EmailDetailView.as_view(), name='email-detail'),
    path('protected/emails/<str:email_id>/read', EmailReadView.as_view(), name='email-read'),
    path('protected/emails/<str:email_id>/star', EmailStarView.as_view(), name='email-star'),
    # Folders and account
    path('protected/folders', FolderListView.as_view(), name='folder-list'),
    path('protected/user/info', UserInfoView.as_view(), name='user-info'),
]
