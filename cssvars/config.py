"""Configuration constants for cssvars."""

import os
import re

# Only rules whose selector is exactly this token are variable sources
ROOT_SELECTOR = ":root"

# var(--name) reference; no fallback handling, a comma stays part of the name
VAR_REFERENCE_PATTERN = re.compile(r"var\((--[^)]+)\)")

# Encoding used by the CLI when reading and writing stylesheets
# Override via CSSVARS_ENCODING environment variable
ENCODING = os.getenv("CSSVARS_ENCODING", "utf-8")

# CLI output
MAX_WARNINGS_SHOWN = 10
