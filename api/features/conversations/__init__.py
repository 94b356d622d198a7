"""Conversations feature package: conversations, their messages, and the
unique display protocol assigned to each conversation at creation.
"""
