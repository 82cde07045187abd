"""HTTP transport for SmartAPI request documents."""
from .http_handler import SmartAPIClient, check_log_dir, user_agent

__all__ = ["SmartAPIClient", "check_log_dir", "user_agent"]
