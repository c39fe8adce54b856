"""Configuration package.

Module split:
    - `settings`: output directory, filename resolution, CLI/env merge.
    - `provider_config`: provider endpoint registry and credential lookup.
"""
