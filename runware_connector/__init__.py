"""Runware connector — validated text-to-image, image-to-image, text-to-video
and background-removal actions against the Runware REST API."""

__version__ = "0.1.0"
