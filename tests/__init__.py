"""pngchunks test suite.

- unit/test_chunk_type.py: ChunkType construction, property bits, equality, rendering
- unit/test_errors.py: exception hierarchy
- unit/test_config.py: CHUNKS_* settings and .env loading
- unit/test_logging.py: JSONFormatter and setup_logging
- unit/test_cli.py: python -m pngchunks
"""
