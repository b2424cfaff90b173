"""Base64 transformer

Options (optional dict):
    urlsafe: use the URL and filesystem safe alphabet
"""

import base64


def _urlsafe(options) -> bool:
    return bool(isinstance(options, dict) and options.get("urlsafe"))


def transform_data(ctx) -> bytes:
    if _urlsafe(ctx.options):
        return base64.urlsafe_b64encode(ctx.data)
    return base64.b64encode(ctx.data)


def restore_data(ctx) -> bytes:
    if _urlsafe(ctx.options):
        return base64.urlsafe_b64decode(ctx.data)
    return base64.b64decode(ctx.data, validate=True)
