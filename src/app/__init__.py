"""Namster - batch invitation rendering.

This package turns an uploaded invitation model image and a list of invitees
into one rendered PNG per invitee, served back as a ZIP archive.
"""

__version__ = "0.1.0"
