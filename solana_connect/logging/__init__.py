"""
Structured logging for Solana Connect.

JSON logs with timestamp, level, event_type and key/value context.
Use get_logger() in all modules.
"""

from solana_connect.logging.logger import get_logger, short_address

__all__ = ["get_logger", "short_address"]
