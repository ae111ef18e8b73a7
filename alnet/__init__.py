"""AlNet realtime messaging and notification service.

Layers follow the usual split: ``domain`` holds entities and rules,
``application`` the use cases, ``infrastructure`` persistence, delivery and
realtime fan-out, and ``interfaces`` the HTTP and websocket surface.
"""
