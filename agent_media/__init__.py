"""agent-media: command-line media generation over remote job-queue providers.

Package split:
    - `config`: environment-driven settings, provider registry, output paths.
    - `video`: request shaping, remote job client, artifact download.
    - `api`: command-line adapter.
"""

__version__ = "0.1.0"
