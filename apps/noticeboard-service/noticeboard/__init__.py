"""Noticeboard service: notice/message distribution and visibility."""
