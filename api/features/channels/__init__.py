"""Channels feature package: the inbound mediums conversations run over."""
