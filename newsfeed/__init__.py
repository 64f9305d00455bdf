# -*- coding: utf-8 -*-

"""
NewsFeed - a desktop reader for the NewsAPI top headlines.
"""

__version__ = "1.0.0"
