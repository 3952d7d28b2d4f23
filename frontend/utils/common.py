"""Common utilities - error handling and client caching helpers."""

import streamlit as st
from typing import Callable, Any
import logging


logger = logging.getLogger(__name__)


def safe_api_call(
    func: Callable,
    error_msg: str = "Request failed",
    show_details: bool = True,
) -> Any:
    """
    Run an API call and show an error box instead of raising.

    Args:
        func: Zero-argument callable to run
        error_msg: Error message prefix
        show_details: Whether to append the exception text

    Returns:
        Function result, or None on error
    """
    try:
        return func()
    except Exception as e:
        error_detail = format_error_message(e) if show_details else ""
        full_msg = f"{error_msg}" + (f": {error_detail}" if error_detail else "")
        st.error(f"❌ {full_msg}")
        logger.error(f"{error_msg}: {str(e)}", exc_info=True)
        return None


def get_cached_api_client():
    """
    Get the API client (cached in session state).

    Returns:
        APIClient instance
    """
    if "api_client" not in st.session_state:
        from services.api_client import APIClient
        import os

        backend_host = os.getenv("BACKEND_HOST", "localhost")
        backend_port = os.getenv("BACKEND_PORT", "8000")
        base_url = f"http://{backend_host}:{backend_port}"
        st.session_state.api_client = APIClient(base_url=base_url)

    return st.session_state.api_client


def format_error_message(error: Exception, context: str = "") -> str:
    """
    Turn an exception into a user-facing message.

    Args:
        error: Exception
        context: What was being attempted

    Returns:
        Message text
    """
    error_str = str(error)

    if "timeout" in error_str.lower():
        return "Request timed out, check the network connection"
    elif "connection" in error_str.lower():
        return "Cannot reach the server, check that the backend is running"
    else:
        return f"{context}: {error_str}" if context else error_str
