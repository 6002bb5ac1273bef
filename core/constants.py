"""
Core — Shared Constants

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500

LOGGER_NAME = 'geocascade'

INDICES_VERSION_CACHE_KEY = 'geography:indices-version:{tenant_id}'
