"""Configuration module for roster-consensus.

Submodules:
- defaults: centralised default values (statutory limits, vote weights)
- settings: environment overrides via pydantic-settings
- loader: YAML scenario files for the CLI
- exceptions: ConfigurationError

Import from the submodules directly; this package keeps no re-exports so
that the data models can depend on ``defaults`` without import cycles.
"""
