"""Pytest configuration and fixtures."""

import pytest

from pngchunks.lib.chunk_type import ChunkType


@pytest.fixture
def rust_chunk() -> ChunkType:
    """The 'RuSt' code: critical, private, reserved bit set, safe to copy."""
    return ChunkType.try_from_bytes([82, 117, 83, 116])
