#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Models for the top-headlines payload and the outcome of a headlines fetch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Source(BaseModel):
    """Publisher of an article."""

    id: Optional[str] = Field(None, description="Provider-side source identifier")
    name: str = Field(..., description="Display name of the source")
    model_config = ConfigDict(frozen=True)


class Article(BaseModel):
    """One news item from the headlines endpoint. Immutable once decoded."""

    source: Source
    author: Optional[str] = None
    title: str = Field(..., description="Headline")
    description: Optional[str] = None
    url: str = Field(..., description="Absolute URL of the full article")
    image_url: Optional[str] = Field(None, alias="urlToImage")
    published_at: str = Field(
        ..., alias="publishedAt", description="ISO-8601 text, kept unparsed"
    )
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def source_id(self) -> Optional[str]:
        return self.source.id

    @property
    def source_name(self) -> str:
        return self.source.name


class HeadlinesResponse(BaseModel):
    """Body of a successful top-headlines response."""

    status: str
    total_results: int = Field(..., alias="totalResults")
    articles: List[Article]
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Fetch outcome ---


class FetchErrorKind(str, Enum):
    TRANSPORT = "transport_error"
    EMPTY_BODY = "empty_body"
    DECODE = "decode_error"
    INVALID_ENDPOINT = "invalid_endpoint"


_USER_MESSAGES = {
    FetchErrorKind.TRANSPORT: "Could not reach the news service",
    FetchErrorKind.EMPTY_BODY: "The news service returned an empty response",
    FetchErrorKind.DECODE: "The news service returned an unexpected response",
    FetchErrorKind.INVALID_ENDPOINT: "The news service address is invalid",
}


@dataclass(frozen=True)
class FetchSuccess:
    articles: Tuple[Article, ...]


@dataclass(frozen=True)
class FetchFailure:
    kind: FetchErrorKind
    detail: str = ""

    @property
    def user_message(self) -> str:
        """Text shown to the user when this failure is surfaced."""
        message = _USER_MESSAGES[self.kind]
        if self.detail:
            return f"{message}: {self.detail}"
        return f"{message}."


FetchOutcome = Union[FetchSuccess, FetchFailure]
