"""Event check-in desk package.

Organized by feature modules (attendees, roster, reports, tunnel) with a thin
Flask controller layer over service/repository layers.
"""
