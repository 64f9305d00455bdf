#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Models Package
Exports the headline records and fetch outcome types.
"""

from .news import (
    Source,
    Article,
    HeadlinesResponse,
    FetchErrorKind,
    FetchSuccess,
    FetchFailure,
    FetchOutcome,
)

__all__ = [
    "Source",
    "Article",
    "HeadlinesResponse",
    "FetchErrorKind",
    "FetchSuccess",
    "FetchFailure",
    "FetchOutcome",
]
