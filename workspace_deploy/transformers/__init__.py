"""Bundled data transformer modules

Targets refer to them by dotted name, e.g.
``transformer: workspace_deploy.transformers.gzip_codec``.
"""
