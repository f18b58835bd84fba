"""Public endpoints for messaging flows."""
from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .actions import submit_contact


class ContactApiView(APIView):
    """
    POST /api/contact
    Body: {"email", "message"?, "name"?, "type"?: "newsletter" | "contact"}
    """

    http_method_names = ["post", "options"]

    def post(self, request, *args, **kwargs):
        data = request.data if hasattr(request.data, "get") else {}
        result = submit_contact(data)
        if "error" in result:
            return Response(result, status=status.HTTP_400_BAD_REQUEST)
        return Response(result, status=status.HTTP_200_OK)
