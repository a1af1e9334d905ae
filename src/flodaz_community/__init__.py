"""Flodaz Community API: feed, posts and comments over external stores."""

__version__ = "2.0.0"
