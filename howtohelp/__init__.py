"""
HowToHelp Site

An async front-end that pulls articles and categories from a Strapi CMS and
serves them as pages, a sitemap and structured metadata.
"""

__version__ = "0.1.0"
__author__ = "HowToHelp Team"
__description__ = "Blog front-end backed by a headless CMS"
__license__ = "MIT"

# Package level constants
DEFAULT_SITE_URL = "https://howtohelp.in"
DEFAULT_AUTHOR = "HowToHelp"

# Version info tuple
VERSION_INFO = tuple(map(int, __version__.split('.')))
