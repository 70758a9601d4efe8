"""Default marker tokens for ${name:default} placeholders."""

DEFAULT_PREFIX = "${"
DEFAULT_SUFFIX = "}"
DEFAULT_SEPARATOR = ":"

# "$${name}" renders as the literal text "${name}"
DEFAULT_ESCAPE = "$"
