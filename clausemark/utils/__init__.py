"""
Utilities shared across contexts.

- logger: loguru setup with provenance tracking
- text_processing: newline normalization, quoting helpers, text diffs
"""
