"""Services package — notifications, view aggregation, and document import.

Submodules are imported directly (``from services.views import ...``); the
repositories depend on ``services.notifications``, so this package keeps its
own imports minimal.
"""

from services.notifications import LoggingNotifier, Messages, Notifier

__all__ = [
    "LoggingNotifier",
    "Messages",
    "Notifier",
]
