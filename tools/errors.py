"""Error types raised by the data source and AI analysis tools."""

from __future__ import annotations


class ChannelUnavailableError(ValueError):
    """The channel could not be resolved or fetched."""

    http_status = 404


class ChannelNotFoundError(ChannelUnavailableError):
    http_status = 404


class InvalidChannelInputError(ChannelUnavailableError):
    http_status = 400


class YouTubeQuotaError(ChannelUnavailableError):
    http_status = 429


class YouTubeAPIError(ChannelUnavailableError):
    http_status = 502


class AIRequestError(ValueError):
    """Analysis type unknown or a required field is missing."""


class AIAnalysisError(Exception):
    """The LLM call failed or its reply could not be parsed."""
