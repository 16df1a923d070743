"""Core functionality for the Hue launcher.

This package contains:
- config: Config and cache file persistence
- cache: Cache staleness, reload and invalidation
- controller: HueController class for hub API interaction
- auth: Hub discovery and link button pairing
- cloud: Cloud scene service client
- context: Per-invocation Context passed to commands
- prompt: Blocking user prompts
- workflow: Keyword dispatch for query and action modes
- errors: Hub and cloud exceptions
- log: Logging setup
"""
