from .logging import get_request_id, log_context, setup_logging

__all__ = ["get_request_id", "log_context", "setup_logging"]
