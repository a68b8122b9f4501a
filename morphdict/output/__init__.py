# Path: morphdict/output/__init__.py
"""
morphdict Output Package

OUTPUT layer: build-time bundle packaging and console summaries.
"""

from .bundle_builder import BundleBuilder, BundleManifest, BundleMember
from .summary import DictionarySummary, summarize

__all__ = [
    'BundleBuilder',
    'BundleManifest',
    'BundleMember',
    'DictionarySummary',
    'summarize',
]
