from __future__ import annotations

import logging
from collections.abc import Mapping

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cms.queries import fetch_archive_images, get_homepage_music_tracks

from .services import build_gallery_items, check_secret, revalidate

log = logging.getLogger("api.revalidate")
gallery_log = logging.getLogger("api.gallery")


class RevalidateView(APIView):
    """
    POST /api/revalidate
    Body: {"tags": [...], "paths": [...]}; no body revalidates the default content set.
    """

    http_method_names = ["post", "options"]

    def post(self, request, *args, **kwargs):
        secret = getattr(settings, "REVALIDATE_SECRET", "")
        if not check_secret(
            secret,
            request.headers.get("X-Revalidate-Secret"),
            request.headers.get("Authorization"),
        ):
            log.warning("revalidate_unauthorized")
            return Response({"error": "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            payload = request.data
            if not isinstance(payload, Mapping):
                raise TypeError("Revalidation body must be a JSON object")
            report = revalidate(payload)
        except Exception:
            log.exception("revalidate_failed")
            return Response({"error": "Revalidation failed"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        log.info(
            "revalidate_completed",
            extra={"tags": report.tags, "paths": report.paths, "failed": report.failed, "defaults": report.used_defaults},
        )
        return Response(
            {
                "success": True,
                "message": "Revalidation completed",
                "timestamp": timezone.now().isoformat(),
            }
        )


class GalleryImagesView(APIView):
    """GET /api/gallery-images: archive images, never cached."""

    http_method_names = ["get", "options"]

    def get(self, request, *args, **kwargs):
        try:
            records = fetch_archive_images()
        except Exception:
            gallery_log.exception("gallery_fetch_failed")
            response = Response(
                {"error": "Internal Server Error fetching gallery images."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        else:
            items = build_gallery_items(records)
            if not items:
                gallery_log.warning("gallery_empty")
            gallery_log.info("gallery_served", extra={"count": len(items)})
            response = Response(items)
        response["Cache-Control"] = "no-store"
        return response


class MusicTracksView(APIView):
    """GET /api/music-tracks: homepage playlist for the audio player."""

    http_method_names = ["get", "options"]

    def get(self, request, *args, **kwargs):
        tracks = get_homepage_music_tracks()
        return Response([track.to_dict() for track in tracks])
