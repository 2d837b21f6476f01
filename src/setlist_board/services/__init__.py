# src/setlist_board/services/__init__.py
"""Business logic services for the Setlist Board posting core.

Components are built per session with ``services.container.build_services``.
"""
