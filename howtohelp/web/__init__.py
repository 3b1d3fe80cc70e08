"""
Web front-end module for the HowToHelp site.

This module provides the page routes, the sitemap and the lead capture
endpoint.
"""
from howtohelp.web.app import create_app

__all__ = ["create_app"]
