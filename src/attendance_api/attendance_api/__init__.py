"""Time attendance API package.

Organized by feature modules (users, attendance, leaves, admin, health)
with a thin Flask JSON controller layer over service/repository layers.
"""
