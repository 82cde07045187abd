"""Order status polling."""
from .poller import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, PollOutcome, poll_order

__all__ = ["DEFAULT_INTERVAL", "DEFAULT_TIMEOUT", "PollOutcome", "poll_order"]
