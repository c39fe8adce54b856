"""External interaction boundary (command line).

Scope:
- Argument parsing, configuration resolution and response shaping.
- No provider protocol logic; that lives in `agent_media.video`.
"""
