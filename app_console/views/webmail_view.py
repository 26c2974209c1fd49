import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme, urlencode
from django.views import View
from django.views.generic import TemplateView

from app_console.clients import get_data_provider
from app_console.clients.demo_provider import DEMO_PASSWORD, DEMO_USER
from app_console.exceptions.mail_data_exception import MailDataException
from app_console.session import ClientSession
from app_console.state import MailboxState, PAGE_SIZE, email_key

logger = logging.getLogger(__name__)

SELECT_ALL = "all"


def get_offset(request) -> int:
    try:
        return max(int(request.GET.get("offset", 0)), 0)
    except (TypeError, ValueError):
        return 0


def safe_next_url(request, default: str) -> str:
    """
    The "next" parameter when it points back to this site, otherwise the default
    """
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()},
                                                    require_https=request.is_secure()):
        return next_url
    return default


def folder_url(folder: str) -> str:
    return reverse("console:folder", kwargs={"folder": folder})


class WebmailLoginRequiredMixin:
    """
    Loads the client session and the data provider before the view runs.

    Without a token the user is sent to the login page, except in demo mode where the
    demo user is signed in on the spot. An auth error from the provider ends the session.
    """

    def dispatch(self, request, *args, **kwargs):
        self.provider = get_data_provider()
        self.client_session = ClientSession.load(request)
        if not self.client_session.is_authenticated:
            if not settings.CONSOLE_DEMO_MODE:
                return redirect(f"{reverse('console:login')}?{urlencode({'next': request.get_full_path()})}")
            self._demo_login(request)
        try:
            return super().dispatch(request, *args, **kwargs)
        except MailDataException as e:
            if not e.is_auth_error:
                raise
            logger.info(f"[{type(self).__name__}.dispatch] Session rejected: {e.message}")
            self.client_session.clear(request)
            messages.warning(request, "Your session has expired. Please sign in again.")
            return redirect("console:login")

    def _demo_login(self, request):
        result = self.provider.login(DEMO_USER["username"], DEMO_PASSWORD)
        self.client_session = ClientSession(result["token"], result["user"])
        self.client_session.save(request)

    def get_state(self, folder=None) -> MailboxState:
        return MailboxState(self.provider, self.client_session, folder)

    def get_folders(self, request):
        try:
            return self.provider.get_folders(self.client_session)
        except MailDataException as e:
            if e.is_auth_error:
                raise
            logger.warning(f"[{type(self).__name__}.get_folders] {e.message}")
            messages.error(request, "Failed to load folders")
            return []


class LoginView(View):
    template_name = "console/webmail/login.html"

    def get(self, request):
        if ClientSession.load(request).is_authenticated:
            return redirect("console:inbox")
        return render(request, self.template_name, self._context(request))

    def post(self, request):
        email = request.POST.get("email", "").strip()
        password = request.POST.get("password", "")
        try:
            result = get_data_provider().login(email, password)
        except MailDataException as e:
            status = e.status if e.status in (400, 401, 403) else 502
            return render(request, self.template_name, self._context(request, email, e.message), status=status)
        ClientSession(result["token"], result["user"]).save(request)
        logger.info(f"[LoginView.post] Signed in: {result['user'].get('username')}")
        return redirect(safe_next_url(request, reverse("console:inbox")))

    @staticmethod
    def _context(request, email="", error=None):
        return {
            "email": email,
            "error": error,
            "next": request.POST.get("next") or request.GET.get("next", ""),
            "demo_user": DEMO_USER if settings.CONSOLE_DEMO_MODE else None,
            "demo_password": DEMO_PASSWORD if settings.CONSOLE_DEMO_MODE else None,
        }


class LogoutView(View):

    def post(self, request):
        client_session = ClientSession.load(request)
        if client_session.is_authenticated:
            try:
                get_data_provider().logout(client_session)
            except MailDataException as e:
                logger.warning(f"[LogoutView.post] Logout call failed: {e.message}")
        client_session.clear(request)
        messages.info(request, "You have been signed out")
        return redirect("console:login")


class FolderView(WebmailLoginRequiredMixin, TemplateView):
    template_name = "console/webmail/mailbox.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        state = self.get_state(kwargs.get("folder"))
        error = None
        try:
            state.load(get_offset(self.request))
        except MailDataException as e:
            if e.is_auth_error:
                raise
            logger.warning(f"[FolderView.get_context_data] Failed to load {state.folder}: {e.message}")
            error = e.message
        state.search(self.request.GET.get("q", ""))
        if self.request.GET.get("select") == SELECT_ALL:
            state.select_all()
        context.update({
            "state": state,
            "emails": [dict(email, key=email_key(email)) for email in state.visible_emails],
            "folders": self.get_folders(self.request),
            "error": error,
            "page_size": PAGE_SIZE,
            "next_offset": state.offset + PAGE_SIZE if state.has_next_page else None,
            "prev_offset": max(state.offset - PAGE_SIZE, 0) if state.offset else None,
        })
        return context


class MessageDetailView(WebmailLoginRequiredMixin, TemplateView):
    template_name = "console/webmail/message.html"

    def get(self, request, *args, **kwargs):
        state = self.get_state(kwargs["folder"])
        try:
            email = state.open(kwargs["email_id"])
        except MailDataException as e:
            if e.is_auth_error:
                raise
            messages.error(request, "Email not found" if e.is_not_found else e.message)
            return redirect(folder_url(state.folder))
        return self.render_to_response(self.get_context_data(
            state=state,
            email=dict(email, key=email_key(email)),
            folders=self.get_folders(request),
            **kwargs
        ))


class ComposeView(WebmailLoginRequiredMixin, TemplateView):
    template_name = "console/webmail/compose.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        source = self.request.POST if self.request.method == "POST" else self.request.GET
        context["form"] = {field: source.get(field, "") for field in ("to", "cc", "bcc", "subject", "body")}
        context["folders"] = self.get_folders(self.request)
        context["state"] = self.get_state()
        return context

    def post(self, request, *args, **kwargs):
        state = self.get_state()
        try:
            state.send(
                to=request.POST.get("to", ""),
                subject=request.POST.get("subject", ""),
                body=request.POST.get("body", ""),
                cc=request.POST.get("cc", ""),
                bcc=request.POST.get("bcc", ""),
                password=request.POST.get("password") or None,
            )
        except MailDataException as e:
            if e.is_auth_error:
                raise
            status = 400 if e.status == 400 else 502
            return self.render_to_response(self.get_context_data(error=e.message, **kwargs), status=status)
        messages.success(request, "Email sent successfully")
        return redirect("console:inbox")


class StarView(WebmailLoginRequiredMixin, View):

    def post(self, request, folder, email_id):
        state = self.get_state(folder)
        try:
            starred = state.toggle_star(email_id)
            messages.success(request, "Email starred" if starred else "Email unstarred")
        except MailDataException as e:
            if e.is_auth_error:
                raise
            messages.error(request, e.message)
        return redirect(safe_next_url(request, folder_url(folder)))


class DeleteView(WebmailLoginRequiredMixin, View):

    def post(self, request, folder, email_id):
        state = self.get_state(folder)
        try:
            state.delete(email_id)
            messages.success(request, "Email deleted")
        except MailDataException as e:
            if e.is_auth_error:
                raise
            messages.error(request, e.message)
        return redirect(folder_url(folder))


class BulkActionView(WebmailLoginRequiredMixin, View):
    """
    Actions of the message list toolbar: select all, select none, delete selected
    """

    def post(self, request, folder):
        action = request.POST.get("action")
        query = request.POST.get("q", "")
        url = folder_url(folder)
        if action == "select_all":
            params = {"select": SELECT_ALL, "q": query} if query else {"select": SELECT_ALL}
            return redirect(f"{url}?{urlencode(params)}")
        if action == "select_none":
            return redirect(f"{url}?{urlencode({'q': query})}" if query else url)
        if action != "delete":
            messages.error(request, "Unknown action")
            return redirect(url)

        email_ids = request.POST.getlist("ids")
        if not email_ids:
            messages.warning(request, "No emails selected")
            return redirect(url)
        state = self.get_state(folder)
        try:
            state.load()
            state.select_many(email_ids)
            deleted = state.delete_selected()
        except MailDataException as e:
            if e.is_auth_error:
                raise
            messages.error(request, e.message)
            return redirect(url)
        messages.success(request, f"{deleted} email(s) deleted")
        return redirect(url)
