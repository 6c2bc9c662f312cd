"""Scrape URLs into structured content and turn it into catalog components."""

__version__ = "0.1.0"
