"""Serializers for documents and transcripts (HTML fragments and plain text)."""
