# Path: morphdict/tests/unit/test_loader.py
"""
Unit Tests for DictionaryLoader

Tests the two load paths:
- load(): memoized, each artifact resolved at most once
- load_temporary(): fresh on every call, nothing retained

and the process-wide default loader built from configuration.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from morphdict.constants import ARTIFACT_ORDER, ArtifactKind, CompressionAlgorithm
from morphdict.loaders import MemoryProvider, PlaceholderProvider
from morphdict.models import (
    CharacterDefinitionParseError,
    DecompressionError,
    EmptyArtifactError,
    LoadError,
    MetadataParseError,
    MissingArtifactError,
    UnknownDictionaryParseError,
)
from morphdict.process.compression import CompressedContainer
from morphdict.process.loader import (
    DictionaryLoader,
    build_loader,
    get_default_loader,
    load,
    load_temporary,
)
from morphdict.process.resolver import PayloadResolver
from fixtures.sample_data import compress_artifacts


ARTIFACT_COUNT = len(ARTIFACT_ORDER)


@pytest.fixture
def compressed_loader(compressed_artifacts, metadata_bytes):
    return DictionaryLoader(MemoryProvider(compressed_artifacts, metadata_bytes))


@pytest.fixture
def raw_loader(raw_artifacts, metadata_bytes):
    return DictionaryLoader(MemoryProvider(raw_artifacts, metadata_bytes))


# ==============================================================================
# LOAD PATH TESTS
# ==============================================================================

class TestLoadEquivalence:
    """Both paths yield the same dictionary from the same inputs."""

    def test_cached_equals_temporary(self, compressed_loader):
        """load() and load_temporary() should agree."""
        assert compressed_loader.load() == compressed_loader.load_temporary()

    def test_compressed_equals_raw(self, compressed_loader, raw_loader):
        """Compressed and uncompressed sources should give equal dictionaries."""
        assert compressed_loader.load() == raw_loader.load()

    @pytest.mark.parametrize('algorithm', list(CompressionAlgorithm))
    def test_every_algorithm(self, raw_artifacts, metadata_bytes, raw_loader, algorithm):
        """Containers of every algorithm should resolve to the same dictionary."""
        provider = MemoryProvider(compress_artifacts(raw_artifacts, algorithm), metadata_bytes)
        assert DictionaryLoader(provider).load() == raw_loader.load()

    def test_mixed_raw_and_compressed(self, raw_artifacts, compressed_artifacts, metadata_bytes, raw_loader):
        """Some artifacts compressed, others raw."""
        mixed = dict(raw_artifacts)
        mixed[ArtifactKind.TRIE_INDEX] = compressed_artifacts[ArtifactKind.TRIE_INDEX]
        mixed[ArtifactKind.UNKNOWN] = compressed_artifacts[ArtifactKind.UNKNOWN]

        loader = DictionaryLoader(MemoryProvider(mixed, metadata_bytes))
        assert loader.load() == raw_loader.load()
        assert loader.resolver.stats.decompressions == 2


class TestCachedLoad:
    """Test memoization of load()."""

    def test_each_artifact_resolved_once(self, compressed_loader):
        """Two loads should decompress each artifact exactly once."""
        compressed_loader.load()
        compressed_loader.load()

        stats = compressed_loader.resolver.stats
        assert stats.decompressions == ARTIFACT_COUNT
        assert stats.resolve_calls == ARTIFACT_COUNT

    def test_cache_filled_after_load(self, compressed_loader, raw_artifacts):
        """The cache should hold the decompressed bytes."""
        compressed_loader.load()

        assert compressed_loader.cache.cached_kinds == list(ARTIFACT_ORDER)
        assert compressed_loader.cache.cached_bytes == sum(len(v) for v in raw_artifacts.values())

    def test_loaders_do_not_share_cache(self, compressed_artifacts, metadata_bytes):
        """Separate loaders resolve independently."""
        first = DictionaryLoader(MemoryProvider(compressed_artifacts, metadata_bytes))
        second = DictionaryLoader(MemoryProvider(compressed_artifacts, metadata_bytes))
        first.load()

        assert not second.cache.cached_kinds

    def test_returned_dictionaries_are_independent_values(self, compressed_loader):
        """Each call returns its own Dictionary built from the cached bytes."""
        first = compressed_loader.load()
        second = compressed_loader.load()
        assert first == second
        assert first.prefix_dictionary.da == second.prefix_dictionary.da

    def test_concurrent_cold_cache(self, compressed_loader):
        """Many threads loading at once should still resolve each artifact once."""
        workers = 12
        barrier = threading.Barrier(workers)

        def worker():
            barrier.wait()
            return compressed_loader.load()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = [f.result() for f in [pool.submit(worker) for _ in range(workers)]]

        assert compressed_loader.resolver.stats.decompressions == ARTIFACT_COUNT
        assert all(result == results[0] for result in results)


class TestTemporaryLoad:
    """Test the ephemeral path."""

    def test_resolves_every_call(self, compressed_loader):
        """Each load_temporary() should re-resolve all artifacts."""
        compressed_loader.load_temporary()
        compressed_loader.load_temporary()

        assert compressed_loader.resolver.stats.decompressions == 2 * ARTIFACT_COUNT

    def test_does_not_fill_cache(self, compressed_loader):
        """load_temporary() should leave the cache untouched."""
        compressed_loader.load_temporary()
        assert compressed_loader.cache.cached_kinds == []

    def test_does_not_use_cache(self, compressed_loader):
        """A warm cache should not short-circuit load_temporary()."""
        compressed_loader.load()
        compressed_loader.load_temporary()

        assert compressed_loader.resolver.stats.decompressions == 2 * ARTIFACT_COUNT


# ==============================================================================
# FAILURE TESTS
# ==============================================================================

class TestLoadFailures:
    """Test error propagation through both paths."""

    def test_placeholder_provider_fails_on_char_definition(self):
        """Empty artifacts with valid metadata fail at the character definition."""
        loader = DictionaryLoader(PlaceholderProvider())

        with pytest.raises(CharacterDefinitionParseError):
            loader.load()
        with pytest.raises(CharacterDefinitionParseError):
            loader.load_temporary()

    def test_empty_artifact_rejected_by_provider(self, raw_artifacts, metadata_bytes):
        """Providers reject zero-length artifacts by default."""
        raw_artifacts[ArtifactKind.WORD_SURFACES] = b''
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, metadata_bytes))

        with pytest.raises(EmptyArtifactError) as exc_info:
            loader.load()
        assert exc_info.value.artifact == 'dict.words'

    def test_missing_artifact(self, raw_artifacts, metadata_bytes):
        del raw_artifacts[ArtifactKind.CONNECTION_COST]
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, metadata_bytes))

        with pytest.raises(MissingArtifactError):
            loader.load_temporary()

    def test_bad_metadata(self, raw_artifacts):
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, b'{"encoding": "UTF-8"}'))
        with pytest.raises(MetadataParseError):
            loader.load()

    def test_bad_metadata_fails_before_resolution(self, compressed_artifacts):
        """Neither path reads or resolves an artifact when metadata is invalid."""
        loader = DictionaryLoader(MemoryProvider(compressed_artifacts, b'not json'))

        with pytest.raises(MetadataParseError):
            loader.load()
        with pytest.raises(MetadataParseError):
            loader.load_temporary()

        assert loader.resolver.stats.resolve_calls == 0
        assert loader.cache.cached_kinds == []

    def test_bad_metadata_reported_over_missing_artifact(self, raw_artifacts):
        del raw_artifacts[ArtifactKind.TRIE_INDEX]
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, b'not json'))

        with pytest.raises(MetadataParseError):
            loader.load()

    def test_bad_metadata_reported_over_strict_decompression(self, raw_artifacts):
        raw_artifacts[ArtifactKind.TRIE_INDEX] = CompressedContainer(
            CompressionAlgorithm.DEFLATE, b'\xff' * 32
        ).to_bytes()
        loader = DictionaryLoader(
            MemoryProvider(raw_artifacts, b'not json'),
            resolver=PayloadResolver(strict=True),
        )

        with pytest.raises(MetadataParseError):
            loader.load_temporary()

    def test_corrupt_unknown_dictionary(self, raw_artifacts, metadata_bytes):
        raw_artifacts[ArtifactKind.UNKNOWN] = b'UNKD\x01\x00'
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, metadata_bytes))

        with pytest.raises(UnknownDictionaryParseError):
            loader.load()

    def test_failures_are_load_errors(self):
        with pytest.raises(LoadError):
            DictionaryLoader(PlaceholderProvider()).load()

    def test_failure_is_logged(self, capture_logs):
        with pytest.raises(LoadError):
            DictionaryLoader(PlaceholderProvider()).load()
        assert 'Dictionary load failed' in capture_logs.getvalue()

    def test_corrupt_container_falls_back(self, raw_artifacts, metadata_bytes):
        """A corrupt container around a non-fallible artifact loads as raw bytes."""
        corrupt = CompressedContainer(CompressionAlgorithm.DEFLATE, b'\xff' * 32).to_bytes()
        raw_artifacts[ArtifactKind.TRIE_INDEX] = corrupt
        loader = DictionaryLoader(MemoryProvider(raw_artifacts, metadata_bytes))

        dictionary = loader.load()
        assert dictionary.prefix_dictionary.da == corrupt
        assert loader.resolver.stats.fallbacks == 1

    def test_corrupt_container_strict(self, raw_artifacts, metadata_bytes):
        corrupt = CompressedContainer(CompressionAlgorithm.DEFLATE, b'\xff' * 32).to_bytes()
        raw_artifacts[ArtifactKind.TRIE_INDEX] = corrupt
        loader = DictionaryLoader(
            MemoryProvider(raw_artifacts, metadata_bytes),
            resolver=PayloadResolver(strict=True),
        )

        with pytest.raises(DecompressionError):
            loader.load()

    def test_failed_load_can_be_retried(self, compressed_artifacts, metadata_bytes):
        """A failure leaves no half-populated state that breaks later loads."""
        provider = MemoryProvider(compressed_artifacts, b'')
        loader = DictionaryLoader(provider)
        with pytest.raises(EmptyArtifactError):
            loader.load()

        provider._metadata = metadata_bytes
        assert loader.load().name == 'sample-ipadic'


# ==============================================================================
# DEFAULT LOADER TESTS
# ==============================================================================

class TestDefaultLoader:
    """Test the configured process-wide loader."""

    def test_build_loader_from_config(self, make_config, compressed_resource_dir):
        """build_loader() should honor provider and strictness settings."""
        config = make_config(
            provider='filesystem',
            resource_dir=compressed_resource_dir,
            strict_decompression=True,
        )
        loader = build_loader(config)

        assert loader.resolver.strict
        assert loader.load().name == 'sample-ipadic'

    def test_default_loader_is_shared(self, mock_env_vars, resource_dir, reset_singletons):
        assert get_default_loader() is get_default_loader()

    def test_module_level_load(self, mock_env_vars, resource_dir, reset_singletons):
        """load() and load_temporary() use MORPHDICT_* configuration."""
        assert load() == load_temporary()
        assert load().name == 'sample-ipadic'

    def test_placeholder_configuration(self, clean_env, monkeypatch, reset_singletons):
        monkeypatch.setenv('MORPHDICT_PROVIDER', 'placeholder')
        monkeypatch.setenv('MORPHDICT_LOG_CONSOLE', 'false')

        with pytest.raises(CharacterDefinitionParseError):
            load()
