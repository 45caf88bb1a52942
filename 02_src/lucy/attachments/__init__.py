"""Attachments module."""

from .encoder import AttachmentEncoder, IFileSource, PendingAttachments

__all__ = ["AttachmentEncoder", "IFileSource", "PendingAttachments"]
