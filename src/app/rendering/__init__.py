"""Invitation rendering.

Overlays invitee names and table labels onto the uploaded model image.
"""

from app.rendering.compositor import (
    PLACEHOLDER_TABLE,
    build_elements,
    compose_image,
    output_filename,
)


__all__ = ["PLACEHOLDER_TABLE", "build_elements", "compose_image", "output_filename"]
