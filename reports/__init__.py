"""Formato de reportes de noticias"""
from .formatter import format_hot_news, format_search_report, source_distribution

__all__ = ["format_hot_news", "format_search_report", "source_distribution"]
