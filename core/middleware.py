"""
Middleware that turns write-path failures into user-facing responses.

Resolution strategy for an exception escaping a view:
1. ConflictError -> "data changed, reload and retry"
2. TransientStoreError / DatabaseError -> generic retryable error
3. Anything else is left to Django (AuthorizationError is a PermissionDenied
   and becomes a 403 on its own)

Navigational requests (a browser form post with a Referer) get a flash
message and a redirect back; everything else gets a bare 409/503.
"""
import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme

from .exceptions import ConflictError, TransientStoreError

logger = logging.getLogger(__name__)


class StoreErrorMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, ConflictError):
            logger.warning("Conflict on %s %s: %s", request.method, request.path, exception)
            return self.respond(request, str(exception), status=409)

        if isinstance(exception, (TransientStoreError, DatabaseError)):
            logger.error("Store failure on %s %s", request.method, request.path, exc_info=exception)
            message = str(exception) if isinstance(exception, TransientStoreError) else TransientStoreError.default_message
            return self.respond(request, message, status=503)

        return None

    def respond(self, request, message, status):
        back = self.safe_referer(request)
        if back:
            messages.error(request, message)
            return redirect(back)
        return HttpResponse(message, status=status, content_type="text/plain; charset=utf-8")

    def safe_referer(self, request):
        """
        Return the Referer when it points back at this site, else None.
        """
        referer = request.META.get("HTTP_REFERER")
        if not referer:
            return None
        if url_has_allowed_host_and_scheme(referer, allowed_hosts={request.get_host()}):
            return referer
        return None
