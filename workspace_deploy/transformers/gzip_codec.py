"""Gzip transformer

Options (optional dict):
    level: compression level 0-9 (default 6)
"""

import gzip

DEFAULT_LEVEL = 6


def transform_data(ctx) -> bytes:
    level = DEFAULT_LEVEL
    if isinstance(ctx.options, dict):
        level = int(ctx.options.get("level", DEFAULT_LEVEL))
    # mtime=0 keeps the output stable for identical input
    return gzip.compress(ctx.data, compresslevel=level, mtime=0)


def restore_data(ctx) -> bytes:
    return gzip.decompress(ctx.data)
