# Path: morphdict/loaders/__init__.py
"""
morphdict Loaders Package

BLIND byte suppliers for dictionary artifacts (INPUT layer).

Sources:
    - filesystem: a resource directory of artifact files
    - bundle: a resource bundle on disk or shipped as package data
    - memory: bytes already held by the caller
    - placeholder: zero-length artifacts (embedding disabled)

Example:
    from morphdict.loaders import create_provider

    provider = create_provider(ConfigLoader())
    raw = provider.read(ArtifactKind.UNKNOWN)
"""

from ..constants import ProviderType
from .provider import ResourceProvider, MemoryProvider, PlaceholderProvider
from .filesystem_provider import FilesystemProvider
from .bundle_provider import BundleProvider


def create_provider(config) -> ResourceProvider:
    """
    Build the provider selected by configuration.

    Args:
        config: ConfigLoader (or anything with get(key, default))

    Returns:
        ResourceProvider for the configured source

    Raises:
        ValueError: If the provider type or its location is not configured
    """
    provider_type = ProviderType(config.get('provider', ProviderType.FILESYSTEM.value))
    allow_empty = config.get('allow_empty_artifacts', False)

    if provider_type == ProviderType.FILESYSTEM:
        return FilesystemProvider(config.get('resource_dir'), allow_empty=allow_empty)
    if provider_type == ProviderType.BUNDLE:
        return BundleProvider(
            config.get('bundle_path'),
            allow_empty=allow_empty,
            verify_checksums=config.get('verify_bundle_checksums', True),
        )
    return PlaceholderProvider()


__all__ = [
    'ResourceProvider',
    'MemoryProvider',
    'PlaceholderProvider',
    'FilesystemProvider',
    'BundleProvider',
    'create_provider',
]
