# s3apt/utils/__init__.py
"""Utility functions for s3apt"""

from .hash_utils import (
    calculate_content_hash,
    generate_content_fingerprint,
    generate_file_fingerprint,
    read_file_async,
)

from .template_utils import (
    render_template,
    render_builtin_template,
)

from .async_utils import (
    run_async,
    run_in_executor,
)

__all__ = [
    "calculate_content_hash",
    "generate_content_fingerprint",
    "generate_file_fingerprint",
    "read_file_async",
    "render_template",
    "render_builtin_template",
    "run_async",
    "run_in_executor",
]
